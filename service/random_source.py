"""
난수 공급원

모든 확률 판정은 주입된 RandomSource에서 [0, 1) 값을 하나씩 순서대로 뽑아 사용합니다.
운영 환경은 random.Random을 사용하고, 테스트는 같은 인터페이스의 대체 구현을 주입합니다.
"""
import random
from typing import Optional, Protocol


class RandomSource(Protocol):
    """[0, 1) 균등 분포 난수 공급원"""

    def random(self) -> float:
        ...


def create_random_source(seed: Optional[int] = None) -> random.Random:
    """운영용 난수 공급원 생성 (seed가 있으면 재현 가능)"""
    return random.Random(seed)
