from pydantic import BaseModel, ConfigDict

from enums.error_kind import ErrorKind
from enums.flow_status import FlowStatus


class FlowResult(BaseModel):
    """Returned by every synchronizer flow so callers need not diff the screen state."""
    model_config = ConfigDict(frozen=True)

    status: FlowStatus
    error: str | None = None
    error_kind: ErrorKind | None = None

    @property
    def is_success(self) -> bool:
        return self.status in (FlowStatus.SUCCESS, FlowStatus.RECONCILED)
