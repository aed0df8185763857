import pytest
from factories import make_file, make_submission

from app.ingestion.models import SubmissionRequest
from app.ingestion.validator import MAX_FILE_SIZE_BYTES, SubmissionValidator


class TestValidSubmission:
    def test_accepts_valid_submission(self, submission: SubmissionRequest) -> None:
        result = SubmissionValidator().validate(submission)
        assert result.ok
        assert result.reason is None
        assert result.offending_field is None

    @pytest.mark.parametrize(
        "mime_type",
        [
            "application/pdf",
            "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
            "application/vnd.ms-excel",
            "image/png",
            "image/webp",
        ],
    )
    def test_accepts_allowed_types(self, mime_type: str) -> None:
        submission = make_submission(file=make_file(mime_type=mime_type))
        assert SubmissionValidator().validate(submission).ok

    def test_accepts_file_at_exact_ceiling(self) -> None:
        submission = make_submission(file=make_file(size=MAX_FILE_SIZE_BYTES))
        assert SubmissionValidator().validate(submission).ok


class TestRequiredFields:
    @pytest.mark.parametrize("field", ["title", "description", "document_type", "priority"])
    def test_rejects_blank_field(self, field: str) -> None:
        submission = make_submission(**{field: "   "})
        result = SubmissionValidator().validate(submission)
        assert not result.ok
        assert result.offending_field == field
        assert "required" in (result.reason or "")

    def test_rejects_missing_file(self) -> None:
        result = SubmissionValidator().validate(make_submission(file=None))
        assert result.offending_field == "file"

    def test_rejects_empty_content(self) -> None:
        result = SubmissionValidator().validate(make_submission(file=make_file(content=b"")))
        assert result.offending_field == "file.content"

    def test_reports_all_missing_fields_together(self) -> None:
        submission = make_submission(title="", description="", file=None)
        result = SubmissionValidator().validate(submission)
        assert set(result.as_dict()) == {"title", "description", "file"}


class TestFileConstraints:
    def test_rejects_disallowed_type(self) -> None:
        submission = make_submission(file=make_file(mime_type="application/x-msdownload"))
        result = SubmissionValidator().validate(submission)
        assert result.offending_field == "file.type"
        assert "not allowed" in (result.reason or "")

    def test_rejects_oversized_declared_size(self) -> None:
        submission = make_submission(file=make_file(size=11_000_000))
        result = SubmissionValidator().validate(submission)
        assert result.offending_field == "file.size"
        assert "too large" in (result.reason or "")

    def test_rejects_content_longer_than_ceiling(self) -> None:
        validator = SubmissionValidator(max_file_size_bytes=10)
        submission = make_submission(file=make_file(size=5, content=b"x" * 11))
        assert validator.validate(submission).offending_field == "file.size"

    def test_rejects_negative_size(self) -> None:
        submission = make_submission(file=make_file(size=-1))
        assert SubmissionValidator().validate(submission).offending_field == "file.size"

    def test_rejects_unknown_priority(self) -> None:
        result = SubmissionValidator().validate(make_submission(priority="urgent"))
        assert result.offending_field == "priority"
