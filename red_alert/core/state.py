from dataclasses import dataclass
from typing import Optional

from ..services.composer import ResponseComposer


@dataclass
class AppState:
    """A simple class to hold the application's shared state."""
    # Built on first use so the transport is created inside the running event loop
    composer: Optional[ResponseComposer] = None


# A single, shared instance of the application state
app_state = AppState()


async def get_composer() -> ResponseComposer:
    # No await before the assignment, so concurrent first calls share one composer
    if app_state.composer is None:
        app_state.composer = ResponseComposer.create()
    return app_state.composer


async def shutdown():
    if app_state.composer is not None:
        await app_state.composer.close()
        app_state.composer = None
