from pydantic import BaseModel, Field


# fields are optional so a missing one reports "Missing fields" (400), not a 422
class CaptureUpload(BaseModel):
    image: str | None = None
    name: str | None = None
    type: str | None = None
    session_id: str | None = Field(default=None, alias="sessionId")


class CaptureUploaded(BaseModel):
    url: str
