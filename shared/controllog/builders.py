"""Typed event builders on top of the controllog SDK."""

from typing import Any, Dict, Optional

from . import sdk


def state_move(
    task_id: str,
    from_: str,
    to: str,
    project_id: str,
    agent_id: str,
    run_id: Optional[str] = None,
    payload: Optional[Dict[str, Any]] = None,
) -> str:
    """Record a task state transition with balanced truth.state postings."""
    body = {"from": from_, "to": to, **(payload or {})}
    return sdk.event(
        kind="state_move",
        actor={"agent_id": agent_id},
        run_id=run_id,
        payload=body,
        project_id=project_id,
        task_id=task_id,
        postings=[
            {
                "account_type": "truth.state",
                "account_id": f"{task_id}:{from_}",
                "unit": "count",
                "delta_numeric": -1,
                "dims": {"state": from_},
            },
            {
                "account_type": "truth.state",
                "account_id": f"{task_id}:{to}",
                "unit": "count",
                "delta_numeric": 1,
                "dims": {"state": to},
            },
        ],
    )


def utility(
    task_id: str,
    project_id: str,
    agent_id: str,
    amount: float,
    run_id: Optional[str] = None,
    payload: Optional[Dict[str, Any]] = None,
) -> str:
    """Record utility earned by an agent, balanced against the project pool."""
    return sdk.event(
        kind="utility",
        actor={"agent_id": agent_id},
        run_id=run_id,
        payload={"amount": amount, **(payload or {})},
        project_id=project_id,
        task_id=task_id,
        postings=[
            {
                "account_type": "value.utility",
                "account_id": agent_id,
                "unit": "points",
                "delta_numeric": amount,
            },
            {
                "account_type": "value.utility",
                "account_id": f"project:{project_id}",
                "unit": "points",
                "delta_numeric": -amount,
            },
        ],
    )


def game_complete(
    task_id: str,
    project_id: str,
    game_id: str,
    score: int,
    words_solved: int,
    total_guesses: int,
    time_budget: int,
    wall_ms: int,
    run_id: Optional[str] = None,
    final_message: Optional[str] = None,
    payload: Optional[Dict[str, Any]] = None,
) -> str:
    """Record the summary of a finished game."""
    body = {
        "game_id": game_id,
        "score": score,
        "words_solved": words_solved,
        "total_guesses": total_guesses,
        "time_budget": time_budget,
        "wall_ms": wall_ms,
    }
    if final_message is not None:
        body["final_message"] = final_message
    body.update(payload or {})

    return sdk.event(
        kind="game_complete",
        actor={"agent_id": f"agent:{project_id}"},
        run_id=run_id,
        payload=body,
        project_id=project_id,
        task_id=task_id,
    )
