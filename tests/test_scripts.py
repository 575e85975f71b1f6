import importlib.util
from pathlib import Path

import pytest

from finance_core.budgets import BudgetStore

SCRIPT = Path(__file__).resolve().parents[1] / 'scripts' / 'suggest_budget.py'


@pytest.fixture
def suggest_script():
    spec = importlib.util.spec_from_file_location('suggest_budget_script', SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_suggest_budget_reports_applied_change(suggest_script, stub_completion, monkeypatch, capsys):
    BudgetStore.for_user('alice').replace({'Food': 100.0, 'Rent': 900.0})
    monkeypatch.setattr(suggest_script, 'OpenAICompletion', lambda: stub_completion('{"Food": 150, "Rent": 850}'))

    suggest_script.main('alice', apply=True)

    assert 'Suggestions applied.' in capsys.readouterr().out
    assert BudgetStore.for_user('alice').load() == {'Food': 150.0, 'Rent': 850.0}


def test_suggest_budget_reports_unchanged_on_fallback(suggest_script, stub_completion, monkeypatch, capsys):
    BudgetStore.for_user('alice').replace({'Food': 100.0, 'Rent': 900.0})
    monkeypatch.setattr(suggest_script, 'OpenAICompletion', lambda: stub_completion(RuntimeError('down')))

    suggest_script.main('alice', apply=True)

    out = capsys.readouterr().out
    assert 'Suggestions applied.' not in out
    assert 'Budgets unchanged.' in out
    assert BudgetStore.for_user('alice').load() == {'Food': 100.0, 'Rent': 900.0}
