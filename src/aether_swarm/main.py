"""Main entry point for the Aether Swarm CLI.

Handles provider selection, swarm construction, and the interactive loop in
which the user plays the client talking to the CEO.
"""

import argparse
import asyncio
import json
import sys

import yaml

from .clients.base import BaseLLMClient
from .clients.factory import create_client, get_available_providers
from .config import get_settings
from .exceptions import (
    AgentError,
    AgentTimeoutError,
    AuthenticationError,
    ConfigurationError,
    ProviderUnavailableError,
    RateLimitError,
    RetriesExhaustedError,
    WorkQueueError,
)
from .logging import setup_logging
from .swarm import Swarm


def load_yaml_config() -> dict:
    """Load configuration from config.yaml if it exists."""
    try:
        with open("config.yaml", "r") as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        return {}


def get_provider_and_model(args: argparse.Namespace, yaml_config: dict) -> tuple[str | None, str | None]:
    """Determine the provider and model to use.

    Priority order:
    1. CLI arguments
    2. Config file (config.yaml)
    3. Environment variables (via pydantic settings)
    4. Auto-detection based on available API keys
    """
    settings = get_settings()
    llm_config = yaml_config.get("llm", {})

    # priority: cli > yaml > env
    provider = args.provider or llm_config.get("provider") or settings.detect_provider()
    model = args.model or llm_config.get("model") or settings.llm_model

    return provider, model


def build_client(args: argparse.Namespace, yaml_config: dict) -> BaseLLMClient:
    """Create the model client shared by every agent.

    Exits the process with a message if no provider can be resolved.
    """
    provider, model = get_provider_and_model(args, yaml_config)

    if not provider:
        print("Error: No LLM provider specified and no API keys found.")
        print("Please set one of the following:")
        print("  - LLM_PROVIDER environment variable")
        print("  - provider in config.yaml")
        print("  - GOOGLE_API_KEY (or GEMINI_API_KEY) or ANTHROPIC_API_KEY")
        sys.exit(1)

    print(f"Using provider: {provider}")
    if model:
        print(f"Using model: {model}")

    # extract client config parameters (excluding provider/model which are handled separately)
    llm_config = yaml_config.get("llm", {})
    client_config = {
        k: v for k, v in llm_config.items()
        if k not in ["provider", "model"]
    }

    try:
        return create_client(
            provider,
            model,
            client_config,
            api_key=get_settings().get_api_key_for_provider(provider),
        )
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)


def _start_server(swarm: Swarm, host: str, port: int) -> None:
    """Start the API server."""
    try:
        import uvicorn

        from .api import create_app
    except ImportError:
        print("Error: API dependencies not installed.")
        print("Install with: pip install 'aether-swarm[api]'")
        sys.exit(1)

    print(f"Starting API server at http://{host}:{port}")
    print(f"API docs available at http://{host}:{port}/docs")
    uvicorn.run(create_app(swarm), host=host, port=port)


def main():
    """Main entry point for the Aether Swarm CLI."""
    parser = argparse.ArgumentParser(description="Aether Swarm CLI")
    parser.add_argument(
        "--provider",
        choices=get_available_providers(),
        help="LLM provider to use (overrides config and auto-detection)"
    )
    parser.add_argument(
        "--model",
        help="LLM model to use (overrides config)"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (also settable via AETHER_SWARM_LOG_LEVEL env var)"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="Deadline in seconds for each message to the CEO (overrides SWARM_CALL_TIMEOUT)"
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Start the API server instead of CLI"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port for the API server (default: 8000)"
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host for the API server (default: 127.0.0.1)"
    )
    args = parser.parse_args()

    # setup logging early
    setup_logging(args.log_level)

    yaml_config = load_yaml_config()
    client = build_client(args, yaml_config)

    settings = get_settings()
    if args.timeout is not None:
        settings = settings.model_copy(update={"call_timeout": args.timeout})
    swarm = Swarm(client, settings=settings)

    # handle API server mode
    if args.serve:
        _start_server(swarm, args.host, args.port)
        return

    try:
        asyncio.run(run_repl(swarm))
    except KeyboardInterrupt:
        print("\nGoodbye!")


def handle_command(swarm: Swarm, command: str) -> None:
    """Print one of the observer views.

    Supported commands: ``/roster``, ``/history <name>``, ``/items [status]``.
    """
    parts = command.split(maxsplit=1)
    name, arg = parts[0], (parts[1].strip() if len(parts) > 1 else None)

    if name == "/roster":
        listing = swarm.directory.get_listing()
        print(listing or "(no agents)")
    elif name == "/history":
        if not arg:
            print("Usage: /history <name>")
            return
        try:
            for turn in swarm.history(arg):
                print(json.dumps(turn))
        except ConfigurationError as e:
            print(f"Error: {e}")
    elif name == "/items":
        try:
            items = swarm.work_items(arg)
        except WorkQueueError as e:
            print(f"Error: {e}")
            return
        if not items:
            print("(no work items)")
        for item in items:
            assignee = f" -> {item.assignee}" if item.assignee else ""
            print(f"[{item.id}] {item.status.value}{assignee}: {item.title}")
    else:
        print(f"Unknown command: {name}. Try /roster, /history <name> or /items.")


async def run_repl(swarm: Swarm) -> None:
    """Run the interactive REPL loop.

    Args:
        swarm: The swarm whose CEO receives the client's messages.
    """
    ceo = await swarm.start()
    print(f"Aether Swarm Initialized. You are the client; {ceo.name} is your CEO.")
    print("Commands: /roster, /history <name>, /items [status]. Type 'exit' to quit.")
    print("-" * 50)

    while True:
        try:
            user_input = await asyncio.to_thread(input, "You: ")
        except (KeyboardInterrupt, EOFError):
            print("\nGoodbye!")
            break

        if user_input.lower() in ("exit", "quit"):
            print("Goodbye!")
            break

        if not user_input.strip():
            continue

        if user_input.startswith("/"):
            handle_command(swarm, user_input.strip())
            continue

        try:
            reply = await swarm.post_message(user_input)
            print(f"\n{ceo.name}: {reply}\n")
        except AuthenticationError as e:
            print(f"Authentication error: {e}")
            print("Please check your API key.")
        except RateLimitError as e:
            print(f"Rate limit exceeded: {e}")
            print("Please wait a moment and try again.")
        except ProviderUnavailableError as e:
            print(f"Provider unavailable: {e}")
            print("Please try again later.")
        except RetriesExhaustedError as e:
            print(f"Giving up: {e}")
        except AgentTimeoutError as e:
            print(f"Timed out: {e}")
        except AgentError as e:
            print(f"Agent error: {e}")
        except Exception as e:
            print(f"Unexpected error: {type(e).__name__}: {e}")


if __name__ == "__main__":
    main()
