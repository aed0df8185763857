import pytest
from factories import make_submission

from app.ingestion.models import SubmissionRequest


@pytest.fixture()
def submission() -> SubmissionRequest:
    return make_submission()
