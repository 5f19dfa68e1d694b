"""Warning monitor control router.

Starts, stops, inspects or triggers the feed/diaper warning monitor.
Admin only.
"""

from enum import Enum

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from sprout_api.core.auth import AuthContext, require_admin
from sprout_api.logging_config import get_logger
from sprout_api.schemas.notification import MonitorResponse
from sprout_api.services.scheduler import get_warning_monitor
from sprout_api.services.warning_monitor import WarningMonitor

logger = get_logger(__name__)

router = APIRouter(prefix="/api/monitor", tags=["monitor"])

INVALID_ACTION_MESSAGE = "Invalid action. Use: start, stop, status, or check"


class MonitorAction(str, Enum):
    START = "start"
    STOP = "stop"
    STATUS = "status"
    CHECK = "check"


@router.get("/warnings", response_model=MonitorResponse)
async def control_warning_monitor(
    action: str | None = Query(default=None),
    auth: AuthContext = Depends(require_admin),
    monitor: WarningMonitor = Depends(get_warning_monitor),
) -> MonitorResponse | JSONResponse:
    """Control the warning monitor.

    Actions:
        start: register the recurring job (no-op if already active)
        stop: remove the recurring job
        status: report whether it is active and its interval
        check: run one pass right now
    """
    try:
        selected = MonitorAction(action)
    except ValueError:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "error": INVALID_ACTION_MESSAGE},
        )

    logger.info(
        "Warning monitor control",
        action=selected.value,
        caretaker_id=str(auth.caretaker_id),
    )

    if selected == MonitorAction.START:
        was_active = monitor.active
        state = monitor.start()
        return MonitorResponse(
            success=True,
            message=(
                "Warning monitoring already active"
                if was_active
                else "Warning monitoring started"
            ),
            active=state.active,
            interval=state.interval,
        )

    if selected == MonitorAction.STOP:
        state = monitor.stop()
        return MonitorResponse(
            success=True,
            message="Warning monitoring stopped",
            active=state.active,
            interval=state.interval,
        )

    if selected == MonitorAction.STATUS:
        state = monitor.status()
        return MonitorResponse(
            success=True,
            active=state.active,
            interval=state.interval,
        )

    result = await monitor.check()
    state = monitor.status()
    if result.skipped:
        message = "Warning check already in progress"
    elif result.error:
        message = f"Warning check failed: {result.error}"
    else:
        message = "Warning check completed"
    return MonitorResponse(
        success=result.error is None,
        message=message,
        active=state.active,
        interval=state.interval,
        warnings_found=result.warnings_found,
        notifications_sent=result.notifications_sent,
    )
