"""
Iterra 커스텀 예외 클래스 정의

모든 예외는 IterraError를 상속받아 일관된 에러 처리를 제공합니다.
정상적인 게임 진행 중의 실패(틱 부족, 재료 부족 등)는 예외가 아닌
결과 객체로 표현되며, 예외는 API 경계에서의 잘못된 호출에만 사용합니다.
"""


class IterraError(Exception):
    """Iterra 기본 예외 클래스"""

    def __init__(self, message: str = "알 수 없는 오류가 발생했습니다"):
        self.message = message
        super().__init__(self.message)


# =============================================================================
# 설정 관련 예외
# =============================================================================


class InvalidConfigError(IterraError):
    """잘못된 설정 값"""

    def __init__(self, key: str, value: str):
        self.key = key
        self.value = value
        super().__init__(f"잘못된 설정 값입니다: {key}={value!r}")


# =============================================================================
# 콘텐츠 관련 예외
# =============================================================================


class InvalidContentError(IterraError):
    """잘못된 콘텐츠 정의"""

    def __init__(self, content_id: str, reason: str):
        self.content_id = content_id
        self.reason = reason
        super().__init__(f"잘못된 콘텐츠 정의입니다: {content_id} ({reason})")


class DuplicateContentError(InvalidContentError):
    """중복된 콘텐츠 ID"""

    def __init__(self, content_id: str):
        super().__init__(content_id, "중복된 ID")


# =============================================================================
# 전투 관련 예외
# =============================================================================


class CombatError(IterraError):
    """전투 관련 기본 예외"""
    pass


class CombatNotInProgressError(CombatError):
    """진행 중인 전투 없음"""

    def __init__(self):
        super().__init__("진행 중인 전투가 없습니다.")


class EncounterAlreadyEndedError(CombatError):
    """이미 종료된 조우"""

    def __init__(self, result: str):
        self.result = result
        super().__init__(f"이미 종료된 조우입니다. (결과: {result})")


# =============================================================================
# 게임 상태 관련 예외
# =============================================================================


class InvalidStateError(IterraError):
    """잘못된 게임 상태에서의 호출"""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"현재 상태에서 수행할 수 없습니다: {reason}")


class GameOverError(InvalidStateError):
    """게임 오버 이후의 행동 시도"""

    def __init__(self):
        super().__init__("게임이 이미 종료되었습니다")
