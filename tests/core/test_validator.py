"""
Unit Tests for Schema Validation

Tests for the question-bank validator module.
"""

import pytest

from paper_toolkit.core.schemas.validator import (
    ValidationError,
    validate_question_record,
    validate_subject_file,
)


@pytest.fixture
def valid_subject_data() -> dict:
    """Create valid subject file data for testing."""
    return {
        "chapters": [
            {
                "id": "9_phy_ch1",
                "number": 1,
                "name": "Physical Quantities",
                "mcqs": [
                    {
                        "id": "9_phy_ch1_m1",
                        "questionText": "SI unit of length is:",
                        "options": ["metre", "second", "kilogram", "ampere"],
                        "correctOption": 0,
                        "difficulty": "easy",
                    }
                ],
                "shortQuestions": [
                    {"id": "9_phy_ch1_s1", "questionText": "Define physics.", "answer": "..."}
                ],
                "longQuestions": [],
            }
        ]
    }


class TestValidateSubjectFile:
    """Tests for validate_subject_file function."""

    def test_validate_when_valid_data_then_passes(self, valid_subject_data):
        """Valid data should pass both basic and strict validation."""
        validate_subject_file(valid_subject_data)
        validate_subject_file(valid_subject_data, strict=True)

    def test_validate_when_not_object_then_raises_error(self):
        with pytest.raises(ValidationError, match="must be an object"):
            validate_subject_file([])

    def test_validate_when_chapters_missing_then_raises_error(self):
        with pytest.raises(ValidationError, match="chapters"):
            validate_subject_file({})

    def test_validate_when_mcq_has_three_options_then_path_reported(self, valid_subject_data):
        """Errors carry the JSON path of the bad record."""
        # Arrange
        valid_subject_data["chapters"][0]["mcqs"][0]["options"] = ["a", "b", "c"]

        # Act
        with pytest.raises(ValidationError) as exc_info:
            validate_subject_file(valid_subject_data)

        # Assert
        assert exc_info.value.path == "chapters/0/mcqs/0/options"

    def test_validate_when_strict_and_bad_difficulty_then_schema_error(self, valid_subject_data):
        """Strict mode runs the JSON schema and collects every error."""
        # Arrange
        valid_subject_data["chapters"][0]["mcqs"][0]["difficulty"] = "expert"
        valid_subject_data["chapters"][0]["shortQuestions"][0]["difficulty"] = "brutal"

        # Act
        with pytest.raises(ValidationError, match="Schema validation failed") as exc_info:
            validate_subject_file(valid_subject_data, strict=True)

        # Assert
        assert len(exc_info.value.errors) == 2


class TestValidateQuestionRecord:
    """Tests for validate_question_record function."""

    def test_validate_when_text_missing_then_field_listed(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_question_record({"id": "x"}, mcq=False)

        assert exc_info.value.errors == ["Missing field: questionText"]

    def test_validate_when_correct_option_out_of_range_then_raises_error(self):
        record = {"id": "m", "questionText": "?", "options": ["a", "b", "c", "d"], "correctOption": 7}
        with pytest.raises(ValidationError, match="Invalid correctOption"):
            validate_question_record(record, mcq=True)

    def test_validate_when_negative_marks_then_raises_error(self):
        with pytest.raises(ValidationError, match="Invalid marks"):
            validate_question_record({"id": "s", "questionText": "?", "marks": -2}, mcq=False)
