"""Pull request event data models."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict


class ChangeRequestMetadata(BaseModel):
    """Pull request metadata fetched once per run."""

    model_config = ConfigDict(frozen=True)

    owner: str
    repo_name: str
    request_number: int
    title: str = ""
    description: str = ""


class PREvent(BaseModel):
    """Pull request event from a GitHub webhook or Actions event file."""

    action: str
    owner: str
    repo_name: str
    number: int
    before: Optional[str] = None  # synchronize only
    after: Optional[str] = None  # synchronize only

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "PREvent":
        """
        Build an event from a ``pull_request`` webhook payload.

        Args:
            payload: Decoded JSON event body

        Returns:
            Parsed PREvent

        Raises:
            ValueError: If repository or pull request number are missing
        """
        if not isinstance(payload, dict):
            raise ValueError("Event payload must be a JSON object")

        repository = payload.get("repository") or {}
        owner = (repository.get("owner") or {}).get("login")
        repo_name = repository.get("name")
        number = payload.get("number")
        if number is None:
            number = (payload.get("pull_request") or {}).get("number")

        if not owner or not repo_name or number is None:
            raise ValueError("Event payload is missing repository or pull request number")

        return cls(
            action=payload.get("action", ""),
            owner=owner,
            repo_name=repo_name,
            number=number,
            before=payload.get("before"),
            after=payload.get("after"),
        )
