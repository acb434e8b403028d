import pytest

from helpers.fakes import MemorySink, SequenceIdGenerator

from assignment_questions.resolver import QuestionGraphResolver


@pytest.fixture
def id_generator():
    return SequenceIdGenerator()


@pytest.fixture
def resolver(id_generator):
    return QuestionGraphResolver(id_generator)


@pytest.fixture
def sink():
    return MemorySink()
