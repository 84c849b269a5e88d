import logging
from typing import Any, Callable

import anyio
from starlette.concurrency import run_in_threadpool

from app import config
from app.exceptions import InternalError, QuotesAPIError

logger = logging.getLogger(__name__)


async def run_service_call(func: Callable[..., Any], *args, **kwargs) -> Any:
    """
    Run a blocking service call on the threadpool, bounded by the request timeout.

    Errors from the error taxonomy pass through untouched. Anything else
    (malformed ids, driver errors, timeouts) is logged here and re-raised as
    InternalError so the client only ever sees {"status": "error"}.

    The worker thread is never abandoned: the request waits for it to hand the
    session back before get_db closes it. PostgreSQL's statement_timeout
    (see app.database) stops the stalled query itself.
    """
    name = getattr(func, "__qualname__", repr(func))
    timeout = config.REQUEST_TIMEOUT_SECONDS
    try:
        with anyio.fail_after(timeout) as scope:
            result = await run_in_threadpool(func, *args, **kwargs)
        # The thread can finish after the deadline without a checkpoint in between
        if scope.cancel_called:
            raise TimeoutError
        return result
    except QuotesAPIError:
        raise
    except TimeoutError as e:
        logger.error(f"{name} timed out after {timeout}s")
        raise InternalError() from e
    except Exception as e:
        logger.error(f"Error on {name}: {e}")
        raise InternalError() from e
