"""Tests for the LLM advisory collaborators."""

import time
from unittest.mock import MagicMock

import pytest

from nebula_clash.agent.advisory import (
    DifficultyConfirmation,
    LLMDifficultyCalibrator,
    LLMMoveAdvisor,
    MoveEvaluation,
    calibrate_difficulty,
    consult_advisor,
    create_collaborators_from_env,
)
from nebula_clash.agent.llm_factory import LLMFactory


def create_mock_llm(result):
    """Mock chat model whose structured-output runnable returns result."""
    structured = MagicMock()
    structured.invoke.return_value = result
    llm = MagicMock()
    llm.with_structured_output.return_value = structured
    return llm, structured


class TestMoveAdvisor:
    def test_structured_verdict(self):
        verdict = MoveEvaluation(is_high_value=True, reason="Adjacent to a hit")
        llm, structured = create_mock_llm(verdict)

        result = LLMMoveAdvisor(llm).evaluate_candidate_move("A  X . .", "A2")

        assert result is verdict
        llm.with_structured_output.assert_called_once_with(MoveEvaluation)
        system, human = structured.invoke.call_args.args[0]
        assert "fleet battle" in system.content
        assert "Move to Evaluate: A2" in human.content
        assert "A  X . ." in human.content

    def test_retries_transient_failures(self):
        verdict = MoveEvaluation(is_high_value=False, reason="Open water")
        llm, structured = create_mock_llm(verdict)
        structured.invoke.side_effect = [ConnectionError("reset"), verdict]

        assert LLMMoveAdvisor(llm).evaluate_candidate_move("", "B3") is verdict
        assert structured.invoke.call_count == 2


class TestConsultAdvisor:
    def test_returns_evaluation(self):
        advisor = MagicMock()
        advisor.evaluate_candidate_move.return_value = MoveEvaluation(
            is_high_value=True, reason="Likely ship"
        )
        assert consult_advisor(advisor, "board", "C3").is_high_value

    def test_failure_returns_none(self):
        advisor = MagicMock()
        advisor.evaluate_candidate_move.side_effect = RuntimeError("boom")
        assert consult_advisor(advisor, "board", "C3") is None

    def test_timeout_returns_none(self):
        advisor = MagicMock()
        advisor.evaluate_candidate_move.side_effect = lambda *args: time.sleep(0.5)
        assert consult_advisor(advisor, "board", "C3", timeout=0.05) is None


class TestDifficultyCalibration:
    def test_llm_confirmation(self):
        llm, structured = create_mock_llm(DifficultyConfirmation(message="Set to hard."))
        assert LLMDifficultyCalibrator(llm).set_difficulty("hard") == "Set to hard."
        assert "Difficulty Level: hard" in structured.invoke.call_args.args[0][1].content

    def test_no_calibrator(self):
        assert calibrate_difficulty(None, "easy") is None

    def test_failure_swallowed(self):
        calibrator = MagicMock()
        calibrator.set_difficulty.side_effect = RuntimeError("offline")
        assert calibrate_difficulty(calibrator, "easy") is None


def test_collaborators_disabled_without_provider(monkeypatch):
    monkeypatch.delenv("NEBULA_CLASH_ADVISOR_PROVIDER", raising=False)
    assert create_collaborators_from_env() == (None, None)


def test_factory_rejects_unknown_provider():
    with pytest.raises(ValueError, match="Unknown provider"):
        LLMFactory().create("carrier-pigeon")
