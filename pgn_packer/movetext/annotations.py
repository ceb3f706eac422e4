# pgn_packer_project/pgn_packer/movetext/annotations.py
"""
Annotation Extractor: pulls `[%clk ...]` and `[%eval ...]` values out of
movetext comment spans.

Comment spans are delimited by the exact tokens `{` and `}`. Nested braces
are not supported, and a token that merely contains a brace does not open
or close a span.
"""
import logging
import re
from typing import Final, List, Optional, Tuple

from pgn_packer.config import settings
from pgn_packer.exceptions import MalformedAnnotationError
from pgn_packer.types import ClockSample, EvalSample

logger = logging.getLogger(settings.APP_NAME + ".AnnotationExtractor")

COMMENT_OPEN: Final[str] = "{"
COMMENT_CLOSE: Final[str] = "}"

EVAL_PATTERN: Final[re.Pattern] = re.compile(r"(-?[0-9]+\.[0-9]{1,2}|#[+-]?[0-9]+)")
EVAL_MATE_PATTERN: Final[re.Pattern] = re.compile(r"#([+-]?[0-9]+)")
EVAL_ADVANTAGE_PATTERN: Final[re.Pattern] = re.compile(r"(-?[0-9]+\.[0-9]{1,2})")
CLOCK_PATTERN: Final[re.Pattern] = re.compile(r"([0-9]+):([0-9]{2}):([0-9]{2})")

# Storage widths of the output columns.
CLOCK_COMPONENT_MAX: Final[int] = 255
MATE_IN_RANGE: Final[Tuple[int, int]] = (-32768, 32767)


def extract_evaluations(token: str) -> List[EvalSample]:
    """
    Finds evaluation values in a comment token.

    A mate score (`#N`) yields `EvalSample(mate_in=N)`. An advantage score
    yields `EvalSample(advantage=x)` and ends the scan of this token.
    """
    samples: List[EvalSample] = []
    for match in EVAL_PATTERN.finditer(token):
        value = match.group(1)

        mate = EVAL_MATE_PATTERN.match(value)
        if mate:
            mate_in = int(mate.group(1))
            low, high = MATE_IN_RANGE
            if not low <= mate_in <= high:
                raise MalformedAnnotationError(f"Mate count out of range: {value!r}")
            samples.append(EvalSample(mate_in=mate_in, advantage=0.0))

        advantage = EVAL_ADVANTAGE_PATTERN.match(value)
        if advantage:
            samples.append(EvalSample(mate_in=0, advantage=float(advantage.group(1))))
            break
    return samples


def extract_clocks(token: str) -> List[ClockSample]:
    """Finds `H:MM:SS` clock values in a comment token."""
    samples: List[ClockSample] = []
    for match in CLOCK_PATTERN.finditer(token):
        hours, minutes, seconds = (int(part) for part in match.groups())
        if max(hours, minutes, seconds) > CLOCK_COMPONENT_MAX:
            raise MalformedAnnotationError(f"Clock component out of range: {match.group(0)!r}")
        samples.append(ClockSample(hours, minutes, seconds))
    return samples


class AnnotationExtractor:
    """
    Tracks comment spans over one game's movetext and collects the samples
    found inside them.

    Samples are kept twice: in game-level lists (encounter order) and as a
    pending pair that the movetext parser attaches to the preceding move.
    """

    def __init__(self):
        self.in_comment: bool = False
        self.clocks: List[ClockSample] = []
        self.evaluations: List[EvalSample] = []
        self.eval_available: bool = False
        self._pending_clock: Optional[ClockSample] = None
        self._pending_eval: Optional[EvalSample] = None

    def track_braces(self, token: str) -> None:
        """Opens or closes a comment span on an exact brace token."""
        if token == COMMENT_OPEN:
            self.in_comment = True
        elif token == COMMENT_CLOSE:
            self.in_comment = False

    def scan(self, token: str) -> None:
        """Collects any clock and evaluation values in a token inside a comment."""
        evaluations = extract_evaluations(token)
        if evaluations:
            if not self.eval_available:
                logger.debug("First evaluation annotation found in this game.")
            self.eval_available = True
            self.evaluations.extend(evaluations)
            if self._pending_eval is None:
                self._pending_eval = evaluations[0]

        clocks = extract_clocks(token)
        if clocks:
            self.clocks.extend(clocks)
            if self._pending_clock is None:
                self._pending_clock = clocks[0]

    def take_pending(self) -> Tuple[Optional[ClockSample], Optional[EvalSample]]:
        """Returns and clears the first clock/eval seen since the last call."""
        pending = self._pending_clock, self._pending_eval
        self._pending_clock = None
        self._pending_eval = None
        return pending
