# mode.py
from __future__ import annotations

import os
from typing import Optional


def compute_plan_mode(approve: Optional[bool] = None) -> bool:
    """
    Decide whether this run only plans (True) or mutates (False).
    Priority:
      1) --approve on the command line
      2) Environment variable APPROVE=1
      3) Default to plan
    """
    if approve:
        return False
    if os.environ.get("APPROVE", "0") == "1":
        return False
    return True


def plan_prefix(plan: bool) -> str:
    return "(plan) " if plan else ""


def log_action(plan: bool, verb: str, subject: str) -> str:
    """Status for one resource action: 'created "x"' or '(plan) would create "x"'."""
    if plan:
        return f'{plan_prefix(plan)}would {verb} "{subject}"'
    return f'{verb}d "{subject}"'


def log_intended_action(plan: bool, tag: str, msg: str) -> None:
    if plan:
        print(f"[{tag}] (plan) would {msg}")
    else:
        print(f"[{tag}] will {msg}")


def log_completed_action(plan: bool, tag: str, msg: str) -> None:
    if plan:
        return
    print(f"[{tag}] {msg}")


def log_plan_mode_warning(plan: bool, tag: str) -> None:
    if plan:
        print(f"[{tag}] no changes were applied, run again with '--approve' to apply the changes")
