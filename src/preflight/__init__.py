"""Preflight — проверка действий пользователя до построения транзакции.

- SafeActionGuard: supply / withdraw / borrow / repay против минимального HF
- validate_safe_action: функциональная обёртка с минимумом по умолчанию 1.2
"""

from .safe_action import (
    LendingAction,
    SafeActionConfig,
    SafeActionGuard,
    SafeActionResult,
    validate_safe_action,
)

__all__ = [
    "LendingAction",
    "SafeActionConfig",
    "SafeActionGuard",
    "SafeActionResult",
    "validate_safe_action",
]
