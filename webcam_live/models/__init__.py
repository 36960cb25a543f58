from webcam_live.models.session import ImageRecord, SessionRecord

__all__ = ["ImageRecord", "SessionRecord"]
