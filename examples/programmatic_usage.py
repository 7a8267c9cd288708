import asyncio

# Import the necessary components
from aether_swarm import Swarm
from aether_swarm.clients import create_client
from aether_swarm.config import get_settings
from aether_swarm.exceptions import AgentError
from aether_swarm.logging import setup_logging


async def run(swarm: Swarm) -> None:
    # 3. Hire the CEO (blue hat). Every other agent is hired by the CEO itself.
    ceo = await swarm.start()
    print(f"Your CEO is {ceo.name}.")

    # 4. Talk to the CEO as the client
    try:
        reply = await swarm.post_message(
            "I need a small web page with a login form. Please plan and build it."
        )
    except AgentError as e:
        print(f"The swarm failed: {e}")
        return
    print(f"\n{ceo.name}: {reply}\n")

    # 5. Observe what happened
    print("Team:")
    for entry in swarm.roster():
        print(f"  {entry['name']}: {entry['role']}")

    print("Work items:")
    for item in swarm.work_items():
        print(f"  [{item.id}] {item.status.value} {item.assignee or '-'}: {item.title}")


def main():
    setup_logging("INFO")

    # 1. Settings come from the environment and an optional .env file
    settings = get_settings()
    provider = settings.detect_provider()
    if not provider:
        print("Please set GOOGLE_API_KEY or ANTHROPIC_API_KEY in .env")
        return

    # 2. Initialize the LLM Client shared by all agents
    client = create_client(
        provider,
        settings.llm_model,
        api_key=settings.get_api_key_for_provider(provider),
    )
    swarm = Swarm(client, settings=settings)

    asyncio.run(run(swarm))


if __name__ == "__main__":
    main()
