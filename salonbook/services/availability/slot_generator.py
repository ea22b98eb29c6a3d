# salonbook/services/availability/slot_generator.py
"""Candidate slot generation for a single working day"""
from typing import Iterable, List, Set, Tuple

from salonbook.utils.time_utils import format_minutes, parse_time, step_minutes


def generate_candidate_slots(open_time: str, close_time: str, slot_duration: int) -> List[str]:
    """
    Slot starts from open_time, stepping by slot_duration minutes.

    Only the start of a slot is checked against close_time; the last slot may
    end after closing when the day span is not a multiple of slot_duration.
    """
    start = parse_time(open_time, "open_time")
    end = parse_time(close_time, "close_time")
    return [format_minutes(m) for m in step_minutes(start, end, slot_duration)]


def covered_slot_starts(
        candidates: Iterable[str],
        windows: Iterable[Tuple[str, str]],
) -> Set[str]:
    """Candidates whose start falls inside any [start, end) window"""
    ranges = [(parse_time(start, "start_time"), parse_time(end, "end_time")) for start, end in windows]
    covered = set()
    for slot in candidates:
        minute = parse_time(slot)
        if any(start <= minute < end for start, end in ranges):
            covered.add(slot)
    return covered
