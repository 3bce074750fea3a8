"""Analysis Service - simulated remote call around the pure classifier"""
import asyncio
import logging
import random

from detection.classifier import AnalysisResult, classify

logger = logging.getLogger(__name__)

DEFAULT_DELAY_RANGE = (0.8, 1.3)
DEFAULT_TIMEOUT = 10.0


class AnalysisError(Exception):
    """The analysis call could not complete (timeout or unexpected failure)."""


def pick_delay(delay_range=DEFAULT_DELAY_RANGE) -> float:
    low, high = delay_range
    if high <= low:
        return max(0.0, low)
    return random.uniform(low, high)


async def analyze_email(email_text: str, delay=None, delay_range=DEFAULT_DELAY_RANGE) -> AnalysisResult:
    """
    Wait for an artificial delay, then classify the text.
    The delay emulates a remote call and never changes the result.
    """
    if delay is None:
        delay = pick_delay(delay_range)
    if delay > 0:
        await asyncio.sleep(delay)
    return classify(email_text)


def run_analysis(email_text: str, timeout=DEFAULT_TIMEOUT, delay=None,
                 delay_range=DEFAULT_DELAY_RANGE) -> AnalysisResult:
    """
    Synchronous entry point for request handlers.
    Raises AnalysisError when the call times out or fails.
    """
    coro = analyze_email(email_text, delay=delay, delay_range=delay_range)
    if timeout is not None:
        coro = asyncio.wait_for(coro, timeout)

    try:
        result = asyncio.run(coro)
    except asyncio.TimeoutError as exc:
        logger.warning("Analysis timed out after %.1fs", timeout)
        raise AnalysisError("Analysis timed out") from exc
    except Exception as exc:
        logger.exception("Analysis failed")
        raise AnalysisError("Analysis failed") from exc

    logger.info("Analysis complete: %s", result.verdict.value)
    return result
