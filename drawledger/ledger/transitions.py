"""
付款申请状态流转规则
Pending → Approved / Rejected，非 Pending 状态为终态
"""

from drawledger.models.draw_request import (
    STATUS_PENDING,
    STATUS_APPROVED,
    STATUS_REJECTED,
)

ALLOWED_TRANSITIONS: dict[str, frozenset[str]] = {
    STATUS_PENDING: frozenset({STATUS_APPROVED, STATUS_REJECTED}),
}


class InvalidTransitionError(ValueError):
    """非法的状态流转"""

    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(f"付款申请状态不能从 {current} 变更为 {target}")


def check_transition(current: str, target: str) -> None:
    """校验状态流转，不合法时抛出 InvalidTransitionError"""
    if target not in ALLOWED_TRANSITIONS.get(current, frozenset()):
        raise InvalidTransitionError(current, target)
