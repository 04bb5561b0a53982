"""
Refocus Pet - Emulator Web Application
FastAPI interface for driving and observing the pet without a renderer.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from pydantic import BaseModel, Field

from brain.config import BehaviorConfig
from shared.types import PresentationState

from .config import EmulatorConfig
from .virtual_pet import VirtualPet

logger = logging.getLogger(__name__)


class LaserRequest(BaseModel):
    """Request to toggle the laser pointer."""

    active: bool


class PointerRequest(BaseModel):
    """Latest pointer position in overlay pixels."""

    x: float
    y: float


class ViewportRequest(BaseModel):
    """New overlay size."""

    width: float = Field(gt=0)
    height: float = Field(gt=0)


class VisibilityRequest(BaseModel):
    """Overlay visibility change."""

    hidden: bool


class EmulatorServer:
    """
    Web host for a VirtualPet.

    Provides:
    - REST endpoints for status and input
    - WebSocket for per-tick state broadcast and input commands
    """

    def __init__(self, virtual_pet: VirtualPet) -> None:
        """
        Initialize the emulator server.

        Args:
            virtual_pet: The pet to host. Its frame loop runs for the app's lifetime.
        """
        self._pet = virtual_pet
        self._pet.set_state_callback(self.on_state_change)
        self._clients: set[WebSocket] = set()
        self._app = self._create_app()

    @property
    def app(self) -> FastAPI:
        """Get the FastAPI application."""
        return self._app

    @property
    def virtual_pet(self) -> VirtualPet:
        return self._pet

    def _create_app(self) -> FastAPI:
        """Create and configure the FastAPI application."""

        @asynccontextmanager
        async def lifespan(app: FastAPI):
            """Manage application startup and shutdown."""
            await self._pet.start()
            yield
            await self._pet.stop()

        app = FastAPI(
            title="Refocus Pet Emulator",
            description="Headless host for the desktop pet simulation",
            version="1.0.0",
            lifespan=lifespan,
        )

        @app.get("/api/status")
        async def get_status() -> dict[str, Any]:
            """Get current pet status."""
            return self._pet.get_status()

        @app.post("/api/laser")
        async def set_laser(request: LaserRequest) -> dict[str, Any]:
            """Toggle laser pointer chasing."""
            self._pet.set_laser(request.active)
            return {"ok": True, "laser_active": request.active}

        @app.post("/api/pointer")
        async def update_pointer(request: PointerRequest) -> dict[str, Any]:
            """Update the pointer position."""
            self._pet.update_pointer(request.x, request.y)
            return {"ok": True}

        @app.post("/api/viewport")
        async def resize(request: ViewportRequest) -> dict[str, Any]:
            """Resize the overlay."""
            self._pet.resize(request.width, request.height)
            return {"ok": True}

        @app.post("/api/visibility")
        async def set_visibility(request: VisibilityRequest) -> dict[str, Any]:
            """Overlay was hidden or shown."""
            self._pet.set_visibility(request.hidden)
            return {"ok": True}

        @app.websocket("/ws")
        async def websocket_endpoint(websocket: WebSocket) -> None:
            """WebSocket endpoint for real-time state updates."""
            await websocket.accept()
            self._clients.add(websocket)
            logger.info(f"Viewer connected ({len(self._clients)} total)")

            try:
                await websocket.send_json({"type": "state", "data": self._pet.state.to_dict()})

                while True:
                    data = await websocket.receive_json()
                    self.handle_command(data)

            except WebSocketDisconnect:
                pass
            except Exception as e:
                logger.warning(f"WebSocket error: {e}")
            finally:
                self._clients.discard(websocket)
                logger.info(f"Viewer disconnected ({len(self._clients)} total)")

        return app

    def handle_command(self, data: dict[str, Any]) -> None:
        """Handle an input command from a viewer."""
        cmd_type = data.get("type", "")

        if cmd_type == "pointer":
            self._pet.update_pointer(float(data.get("x", 0.0)), float(data.get("y", 0.0)))

        elif cmd_type == "laser":
            self._pet.set_laser(bool(data.get("active", False)))

        elif cmd_type == "viewport":
            width = float(data.get("width", 0.0))
            height = float(data.get("height", 0.0))
            if width > 0 and height > 0:
                self._pet.resize(width, height)

        elif cmd_type == "visibility":
            self._pet.set_visibility(bool(data.get("hidden", False)))

        else:
            logger.debug(f"Ignoring unknown command: {cmd_type!r}")

    def on_state_change(self, state: PresentationState) -> None:
        """Callback after each tick - broadcast to viewers."""
        if self._clients:
            asyncio.create_task(self.broadcast_state(state))

    async def broadcast_state(self, state: PresentationState) -> None:
        """Send state update to all viewers."""
        message = {"type": "state", "data": state.to_dict()}

        for client in list(self._clients):
            try:
                await client.send_json(message)
            except Exception:
                # Client disconnected
                self._clients.discard(client)


def create_app(
    config: EmulatorConfig | None = None,
    behavior_config: BehaviorConfig | None = None,
) -> FastAPI:
    """
    Create the emulator FastAPI application.

    Args:
        config: Emulator configuration. Defaults to EmulatorConfig().
        behavior_config: Behavior tuning. Defaults to BehaviorConfig().

    Returns:
        Configured FastAPI application
    """
    config = config or EmulatorConfig()
    errors = config.validate()
    if errors:
        raise ValueError(f"Invalid emulator config: {'; '.join(errors)}")

    behavior_config = behavior_config or BehaviorConfig()
    errors = behavior_config.validate()
    if errors:
        raise ValueError(f"Invalid behavior config: {'; '.join(errors)}")

    server = EmulatorServer(VirtualPet(config=config, behavior_config=behavior_config))
    return server.app


def main() -> None:
    """Entry point for running the emulator."""
    import argparse
    import uvicorn

    parser = argparse.ArgumentParser(description="Refocus Pet Emulator")
    parser.add_argument(
        "--host", default="0.0.0.0", help="Host to bind to (default: 0.0.0.0)"
    )
    parser.add_argument(
        "--port", type=int, default=8080, help="Port to bind to (default: 8080)"
    )
    parser.add_argument(
        "--fps", type=int, default=60, help="Simulation frame rate (default: 60)"
    )
    parser.add_argument(
        "--db-path", default=None, help="SQLite file for saved stats (default: ~/.refocus-pet/pet.db)"
    )
    parser.add_argument(
        "--persist",
        default=True,
        action=argparse.BooleanOptionalAction,
        help="Enable/disable saving stats between sessions (default: enabled)",
    )
    parser.add_argument(
        "--debug", action="store_true", help="Log every tick"
    )

    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO)
    config = EmulatorConfig(
        host=args.host,
        port=args.port,
        fps=args.fps,
        db_path=args.db_path,
        persistence_enabled=args.persist,
    )
    app = create_app(config)
    uvicorn.run(app, host=config.host, port=config.port)


if __name__ == "__main__":
    main()
