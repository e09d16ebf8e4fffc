import math
from typing import Dict, List

from csvsniff.config import get_logger
from csvsniff.logic.frequency import FrequencyTable

logger = get_logger(__name__)


def mean(frequency_of_line: Dict[int, int], size: int) -> float:
    total = sum(frequency_of_line.get(line, 0) for line in range(1, size + 1))
    return total / size


def deviation(frequency_of_line: Dict[int, int], size: int) -> float:
    """
    Mean absolute deviation of the per-line counts over lines 1..size.
    Lines without an entry count as zero.
    """
    average = mean(frequency_of_line, size)
    total = 0.0
    for line in range(1, size + 1):
        frequency = float(frequency_of_line.get(line, 0))
        total += math.sqrt((average - frequency) * (average - frequency))
    return total / size


def analyze(frequencies: FrequencyTable, sample_lines: int) -> List[int]:
    """
    A delimiter appears the same number of times on every line, so any byte
    whose per-line count has zero deviation over the sampled lines is a
    candidate. Candidates keep the table's first-seen order.
    """
    if sample_lines <= 0:
        logger.debug("No complete lines sampled. No candidates.")
        return []

    candidates = []
    for char, frequency_of_line in frequencies.items():
        score = deviation(frequency_of_line, sample_lines)
        logger.debug(f"Byte {chr(char)!r}: deviation {score:.6f} over {sample_lines} lines")
        if score == 0.0:
            candidates.append(char)

    return candidates
