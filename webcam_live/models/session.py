from dataclasses import dataclass, field


@dataclass
class ImageRecord:
    url: str
    type: str
    public_id: str


@dataclass
class SessionRecord:
    session_id: str
    user_name: str
    timestamp: str
    # never set anywhere; kept so the admin listing shape stays stable
    accessed: bool = False
    images: list[ImageRecord] = field(default_factory=list)
