import pytest
import sys
from pathlib import Path
from PIL import Image

# Add src to sys.path so we can import paper_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from paper_toolkit.builder.loading import InMemoryQuestionStore  # noqa: E402
from paper_toolkit.core.models import Difficulty, Question, QuestionType  # noqa: E402


def make_question(
    qid: str,
    qtype: QuestionType = QuestionType.SHORT,
    chapter_id: str = "ch1",
    text: str | None = None,
    marks: int | None = None,
    difficulty: Difficulty = Difficulty.MEDIUM,
    correct: int | None = 0,
    answer: str | None = None,
) -> Question:
    """Helper to create test questions."""
    is_mcq = qtype == QuestionType.MCQ
    return Question(
        id=qid,
        type=qtype,
        text=text if text is not None else f"Question {qid}?",
        chapter_id=chapter_id,
        marks=marks if marks is not None else {"mcq": 1, "short": 2, "long": 5}[qtype.value],
        difficulty=difficulty,
        options=(f"{qid} a", f"{qid} b", f"{qid} c", f"{qid} d") if is_mcq else (),
        correct_option_index=correct if is_mcq else None,
        answer=answer,
    )


def make_bank(
    chapter_id: str = "ch1",
    mcq: int = 0,
    short: int = 0,
    long: int = 0,
    difficulty: Difficulty = Difficulty.MEDIUM,
) -> list[Question]:
    """Numbered questions for one chapter, ids like "ch1_mcq_3"."""
    questions = []
    for qtype, count in ((QuestionType.MCQ, mcq), (QuestionType.SHORT, short), (QuestionType.LONG, long)):
        for i in range(count):
            questions.append(
                make_question(f"{chapter_id}_{qtype.value}_{i}", qtype, chapter_id, difficulty=difficulty)
            )
    return questions


# Common test fixtures
@pytest.fixture
def question_factory():
    """Return the make_question helper."""
    return make_question


@pytest.fixture
def physics_bank() -> list[Question]:
    """Two chapters with enough questions to fill a matric science paper."""
    return make_bank("ch1", mcq=10, short=15, long=3) + make_bank("ch2", mcq=10, short=15, long=3)


@pytest.fixture
def physics_store(physics_bank) -> InMemoryQuestionStore:
    """In-memory store holding physics_bank under 9th/physics."""
    return InMemoryQuestionStore.from_questions("9th", "physics", physics_bank)


@pytest.fixture
def sample_image(tmp_path: Path):
    """Create a simple test image."""
    img = Image.new("RGB", (200, 100), color="white")
    img_path = tmp_path / "sample.png"
    img.save(img_path)
    return img_path
