"""
전투 시스템 서비스 모듈

공격 판정, 플레이어 전투 행동 등 전투 관련 로직을 담당합니다.
"""
from service.combat.damage_calculator import (
    AttackOptions,
    AttackOutcome,
    AttackResult,
    DamageCalculator,
)

__all__ = ["AttackOptions", "AttackOutcome", "AttackResult", "DamageCalculator"]
