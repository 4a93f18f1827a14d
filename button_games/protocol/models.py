"""Protocol models exchanged between the engine and a chat transport."""

from typing import List, Optional

from pydantic import BaseModel, StrictBool, StrictInt, StrictStr


class ClickEvent(BaseModel):
    """A single button click. `snapshot` is the view version the button came from."""

    session_id: StrictStr
    identity: StrictStr
    payload: StrictStr
    snapshot: Optional[StrictInt] = None

    class Config:
        extra = "forbid"


class Button(BaseModel):
    label: StrictStr
    payload: StrictStr

    class Config:
        extra = "forbid"
        frozen = True


class RenderView(BaseModel):
    """Keyboard grid plus status line, recomputed from committed session state."""

    session_id: StrictStr
    game: StrictStr
    snapshot: StrictInt
    rows: List[List[Button]]
    status_text: StrictStr
    finished: StrictBool
    outcome: StrictStr
    winner: Optional[StrictStr] = None
    current_player: Optional[StrictStr] = None

    class Config:
        extra = "forbid"
        frozen = True


class Response(BaseModel):
    """Stable response envelope used by the router and CLI."""

    ok: StrictBool
    code: StrictStr
    message: StrictStr
    view: Optional[RenderView] = None
    session_id: Optional[StrictStr] = None

    class Config:
        extra = "forbid"
