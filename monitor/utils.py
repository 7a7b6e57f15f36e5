import functools
import inspect

from loguru import logger


def safe_func_wrapper(func):
    """
    Log entry, exit, and exceptions of a scheduler job.

    Works on plain functions and coroutine functions. Exceptions are logged
    and re-raised unchanged so the scheduler sees the real error.
    """

    def _describe(args, kwargs) -> str:
        bound = inspect.signature(func).bind(*args, **kwargs)
        bound.apply_defaults()
        params = {k: v for k, v in bound.arguments.items() if k != "self"}
        return f"{func.__qualname__}({params})"

    if inspect.iscoroutinefunction(func):

        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs):
            call = _describe(args, kwargs)
            logger.debug(f"Entering {call}")
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                logger.error(f"{func.__qualname__} failed: {type(e).__name__}: {e}")
                raise
            logger.debug(f"Exiting {func.__qualname__}")
            return result

        return async_wrapper

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        call = _describe(args, kwargs)
        logger.debug(f"Entering {call}")
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            logger.error(f"{func.__qualname__} failed: {type(e).__name__}: {e}")
            raise
        logger.debug(f"Exiting {func.__qualname__}")
        return result

    return wrapper
