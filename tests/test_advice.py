from datetime import date, datetime

from finance_core.advice import Advice, AdviceService, build_advice_prompt
from finance_core.ai import ExternalServiceError
from finance_core.events import EventChannel, RefreshType
from finance_core.ledger import TransactionLedger


def _ledger():
    return TransactionLedger.from_records([
        {'Transaction Date': '2024-01-28', 'Amount': -300, 'Category': 'Dining'},
        {'Transaction Date': '2024-02-10', 'Amount': -80.5, 'Category': 'Groceries'},
        {'Transaction Date': '2024-02-11', 'Amount': 4000, 'Category': 'Income'},
    ])


def test_prompt_contains_range_and_categories():
    prompt = build_advice_prompt({'Dining': 300, 'Groceries': 80.5}, date(2024, 1, 28), date(2024, 2, 11))
    assert 'Data range: 2024-01-28 to 2024-02-11' in prompt
    assert 'Dining: 300.00\nGroceries: 80.50' in prompt
    assert 'Spring Festival' in prompt


def test_regenerate_stores_new_advice_and_notifies(stub_completion):
    events = EventChannel()
    received = []
    events.subscribe(received.append)
    completion = stub_completion('  Dining spiked around the Spring Festival.  ')
    service = AdviceService(completion, events)

    advice = service.regenerate(_ledger())

    assert advice.text == 'Dining spiked around the Spring Festival.'
    assert service.advice is advice
    assert received == [RefreshType.ADVICE]
    assert 'Dining: 300.00' in completion.prompts[0]


def test_regenerate_keeps_previous_advice_on_failure(stub_completion, caplog):
    previous = Advice('Keep saving.', datetime(2024, 1, 1, 9, 30))
    service = AdviceService(stub_completion(ExternalServiceError('timeout')), initial=previous)

    assert service.regenerate(_ledger()) is previous
    assert 'Failed to generate advice' in caplog.text


def test_regenerate_keeps_previous_advice_on_empty_reply(stub_completion):
    previous = Advice('Keep saving.')
    service = AdviceService(stub_completion('   '), initial=previous)
    assert service.regenerate(_ledger()) is previous


def test_regenerate_without_transactions_skips_service(stub_completion):
    completion = stub_completion('unused')
    service = AdviceService(completion)
    assert service.regenerate(TransactionLedger()).text == ''
    assert completion.prompts == []


def test_formatted_time():
    assert Advice('x', datetime(2024, 3, 5, 14, 7)).formatted_time() == 'Mar 05, 2024 14:07'
