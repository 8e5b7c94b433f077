import logging
import re

from .errors import MalformedMetric, NoMetricFound

logger = logging.getLogger(__name__)

# The app logs a running average repeatedly; a match never crosses a newline.
_FPS_PATTERN = re.compile(r"fps.*?avg ([\d\.]+)")


def extract_fps(text: str) -> float:
    """Return the last reported fps average in a run's stderr.

    Raises:
        NoMetricFound: `text` has no fps/avg line.
        MalformedMetric: The last captured number is not a valid float.
    """
    matches = _FPS_PATTERN.findall(text)
    if not matches:
        raise NoMetricFound()

    fragment = matches[-1]
    try:
        fps = float(fragment)
    except ValueError as e:
        raise MalformedMetric(fragment) from e
    logger.debug("fps samples: %d, final avg: %.2f", len(matches), fps)
    return fps
