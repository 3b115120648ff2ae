import pytest
import sys
from pathlib import Path
from PIL import Image

# Add src to sys.path so we can import marksheet_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from marksheet_toolkit.core.models import Mark, Student  # noqa: E402
from marksheet_toolkit.grading.grades import grade  # noqa: E402
from marksheet_toolkit.grading.scheme import marking_scheme_for  # noqa: E402
from marksheet_toolkit.storage import InMemoryStore  # noqa: E402


# Common test fixtures
@pytest.fixture
def junior_student():
    """Class 7, section A."""
    return Student(id=1, name="Rahim Uddin", roll=1, class_level=7, section="A")


@pytest.fixture
def science_student():
    """Class 9, Science group."""
    return Student(id=2, name="Karim Hasan", roll=1, class_level=9, group="Science")


@pytest.fixture
def make_mark():
    """Factory building a graded Mark from a total."""

    def _make(student: Student, subject: str, exam: str, total: float, mark_id=None) -> Mark:
        scheme = marking_scheme_for(subject, student.class_level)
        result = grade(total, scheme.total)
        return Mark(
            id=mark_id,
            student_id=student.id,
            subject=subject,
            exam=exam,
            class_level=student.class_level,
            section=student.section,
            group=student.group,
            total=total,
            grade=result.letter,
            grade_point=result.grade_point,
        )

    return _make


@pytest.fixture
def memory_store():
    return InMemoryStore()


@pytest.fixture
def sample_image(tmp_path: Path):
    """Create a simple test image."""
    img = Image.new("RGB", (200, 100), color="white")
    img_path = tmp_path / "sample.png"
    img.save(img_path)
    return img_path
