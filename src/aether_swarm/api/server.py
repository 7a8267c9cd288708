"""FastAPI server exposing a swarm to clients and observers."""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from ..exceptions import AgentError, ConfigurationError, WorkQueueError
from ..logging import get_logger
from ..swarm import Swarm
from .schemas import AgentInfo, MessageRequest, MessageResponse, WorkItemInfo

logger = get_logger(__name__)


def create_app(swarm: Swarm) -> FastAPI:
    """Create and configure the FastAPI application for one swarm."""
    app = FastAPI(
        title="Aether Swarm API",
        description="API for talking to the swarm's CEO and observing the team",
        version="0.1.0",
    )

    # configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # restrict in production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.swarm = swarm

    @app.post("/api/messages", response_model=MessageResponse)
    async def post_message(request: MessageRequest) -> MessageResponse:
        """Send a client message to the CEO and wait for the reply."""
        try:
            reply = await swarm.post_message(request.text, timeout=request.timeout)
        except AgentError as e:
            logger.warning(f"client message failed: {e}")
            return MessageResponse(state="error", error=str(e))
        return MessageResponse(
            state="completed",
            agent=swarm.ceo.name if swarm.ceo else None,
            content=reply,
        )

    @app.get("/api/agents", response_model=list[AgentInfo])
    def list_agents() -> list[AgentInfo]:
        """List every agent in hiring order."""
        return [AgentInfo(**entry) for entry in swarm.roster()]

    @app.get("/api/agents/{name}/history")
    def get_history(name: str) -> list[dict]:
        """Get the conversation history of one agent."""
        try:
            return swarm.history(name)
        except ConfigurationError as e:
            raise HTTPException(status_code=404, detail=str(e))

    @app.get("/api/work-items", response_model=list[WorkItemInfo])
    def list_work_items(status: str | None = None) -> list[WorkItemInfo]:
        """List work items, optionally filtered by status."""
        try:
            items = swarm.work_items(status)
        except WorkQueueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return [WorkItemInfo.from_item(item.to_dict()) for item in items]

    return app
