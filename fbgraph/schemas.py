from pydantic import BaseModel, ConfigDict


class GraphError(BaseModel):
    """The ``error`` object of a Graph API response."""

    message: str = "Unknown Exception"
    type: str = ""
    code: int = -1
    error_subcode: int = -1
    fbtrace_id: str | None = None

    model_config = ConfigDict(extra="allow")
