"""External advisory collaborators backed by LLM chat models.

Two optional oracles sit beside the opponent controller:

- a move evaluator that scores a candidate shot as high value or not
- a difficulty calibrator called once at game start (cosmetic only)

Both are advisory. Callers go through consult_advisor and
calibrate_difficulty, which log failures and time-outs and return None so
that gameplay never depends on the oracle being reachable.
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Protocol

from langchain_core.messages import HumanMessage, SystemMessage
from pydantic import BaseModel, Field
from tenacity import before_sleep_log, retry, stop_after_attempt, wait_exponential

from ..utils.constants import ADVISORY_TIMEOUT_SECONDS
from .llm_factory import LLMFactory
from .prompts import (
    DIFFICULTY_SYSTEM_PROMPT,
    MOVE_EVALUATION_SYSTEM_PROMPT,
    format_difficulty_prompt,
    format_move_evaluation_prompt,
)

logger = logging.getLogger(__name__)


class MoveEvaluation(BaseModel):
    """Verdict on one candidate shot."""

    is_high_value: bool = Field(description="Whether the move is a high-value move.")
    reason: str = Field(description="The reasoning behind the evaluation.")


class DifficultyConfirmation(BaseModel):
    """Acknowledgement of a difficulty change."""

    message: str = Field(
        description="Confirmation message indicating the AI difficulty has been adjusted."
    )


class MoveAdvisor(Protocol):
    def evaluate_candidate_move(self, board_snapshot: str, move: str) -> MoveEvaluation: ...


class DifficultyCalibrator(Protocol):
    def set_difficulty(self, level: str) -> str: ...


class LLMMoveAdvisor:
    """Move evaluator that asks a chat model for a structured verdict."""

    def __init__(self, llm):
        """Initialize with any LangChain chat model supporting structured output."""
        self.llm = llm
        self._evaluator = llm.with_structured_output(MoveEvaluation)

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=8),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
    def evaluate_candidate_move(self, board_snapshot: str, move: str) -> MoveEvaluation:
        """Score one candidate move.

        Args:
            board_snapshot: ASCII view of the enemy board from the shooter's side
            move: Cell label such as "C7"

        Returns:
            MoveEvaluation from the model
        """
        messages = [
            SystemMessage(content=MOVE_EVALUATION_SYSTEM_PROMPT),
            HumanMessage(content=format_move_evaluation_prompt(board_snapshot, move)),
        ]
        return self._evaluator.invoke(messages)


class LLMDifficultyCalibrator:
    """Difficulty calibrator that asks a chat model to confirm the level."""

    def __init__(self, llm):
        self.llm = llm
        self._confirmer = llm.with_structured_output(DifficultyConfirmation)

    def set_difficulty(self, level: str) -> str:
        messages = [
            SystemMessage(content=DIFFICULTY_SYSTEM_PROMPT),
            HumanMessage(content=format_difficulty_prompt(level)),
        ]
        return self._confirmer.invoke(messages).message


def consult_advisor(
    advisor: MoveAdvisor,
    board_snapshot: str,
    move: str,
    timeout: float = ADVISORY_TIMEOUT_SECONDS,
) -> MoveEvaluation | None:
    """Ask the advisor about a move without ever blocking the game on it.

    Returns:
        The evaluation, or None if the advisor failed or took too long
    """
    pool = ThreadPoolExecutor(max_workers=1)
    future = pool.submit(advisor.evaluate_candidate_move, board_snapshot, move)
    try:
        return future.result(timeout=timeout)
    except FutureTimeoutError:
        logger.warning(f"Move advisor timed out after {timeout}s evaluating {move}")
        return None
    except Exception as e:
        logger.warning(f"Move advisor failed evaluating {move}: {e}")
        return None
    finally:
        pool.shutdown(wait=False, cancel_futures=True)


def calibrate_difficulty(calibrator: DifficultyCalibrator | None, level: str) -> str | None:
    """Notify the calibration collaborator of the chosen difficulty.

    Returns:
        The collaborator's confirmation, or None if there is none or it failed
    """
    if calibrator is None:
        return None
    try:
        message = calibrator.set_difficulty(level)
    except Exception as e:
        logger.warning(f"Failed to adjust AI difficulty to {level}: {e}")
        return None
    logger.info(f"AI calibrated: {message}")
    return message


def create_collaborators_from_env() -> tuple[LLMMoveAdvisor | None, LLMDifficultyCalibrator | None]:
    """Build the LLM collaborators configured through the environment.

    NEBULA_CLASH_ADVISOR_PROVIDER selects the provider (unset disables both);
    NEBULA_CLASH_ADVISOR_MODEL optionally overrides the model.
    """
    provider = os.getenv("NEBULA_CLASH_ADVISOR_PROVIDER")
    if not provider:
        return None, None

    llm = LLMFactory().create(provider, model=os.getenv("NEBULA_CLASH_ADVISOR_MODEL"))
    logger.info(f"Advisory collaborators enabled with provider {provider}")
    return LLMMoveAdvisor(llm), LLMDifficultyCalibrator(llm)
