from datetime import datetime, timezone

from pydantic import BaseModel, Field


class ClickEvent(BaseModel):
    # one button press; the server stamps it, never the browser
    clickTime: datetime = Field(..., description="UTC time the server recorded the click")

    @classmethod
    def now(cls) -> "ClickEvent":
        return cls(clickTime=datetime.now(timezone.utc))
