"""Probe-and-Bisect - find the first fitting candidate with few probes

The probe answers "does at least one candidate in this slice fit?". Given an
ordered list where the answer is monotone by prefix, bisection narrows to the
first fitting candidate in at most ceil(log2(n)) + 1 probes.
"""

from typing import Callable, Optional, Sequence, TypeVar

T = TypeVar("T")


def find_first_fitting(
    candidates: Sequence[T],
    probe: Callable[[Sequence[T]], bool],
) -> Optional[T]:
    """첫 번째 패킹 가능 후보 탐색

    Args:
        candidates: 작은 순으로 정렬된 후보 목록
        probe: 슬라이스 안에 담을 수 있는 후보가 있는지 판정하는 콜백

    Returns:
        첫 번째 후보 또는 None (전체 probe 실패)
    """
    if not candidates:
        return None

    if not probe(candidates):
        return None

    window = candidates
    while len(window) > 1:
        mid = len(window) // 2
        left = window[:mid]
        if probe(left):
            window = left
        else:
            # 전체가 fit 이고 왼쪽이 아니면 오른쪽에 반드시 있음
            window = window[mid:]

    return window[0]
