from pydantic import BaseModel


class DeleteSessionResponse(BaseModel):
    session_id: str
    remote_cleaned: bool
