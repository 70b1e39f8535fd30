"""
Pytest fixtures for the film roll log tests.

Provides a representative roll log (text and parsed) and a file on disk for
the command-line tests.
"""

import sys
from pathlib import Path

import pytest
from loguru import logger

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from infrastructure.roll_log_repository import RollLogRepository  # noqa: E402

SAMPLE_LOG = """\
# Film roll log
Company ILF
Ilford

Company KDK
Kodak

Stock HP5
HP5 Plus
ILF
400
5 + 3

Stock PTR
Portra
KDK
160-400
4

Camera OM1
Olympus
OM-1

Camera FM2
Nikon
FM2

Lab LAB
Local Lab

2024-01-05 HP5 OM1 LAB 2024-01-20 2024-02-01 12
Beach trip

2024-02-10 PTR FM2 -
Portraits

2024-02-11 HP5 OM1

2024-03-01 PTR OM1 LAB 2024-03-15
"""


@pytest.fixture(autouse=True)
def _reset_loguru():
    yield
    logger.remove()


@pytest.fixture
def sample_text():
    return SAMPLE_LOG


@pytest.fixture
def sample_log():
    return RollLogRepository().parse_text(SAMPLE_LOG)


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "rolls.log"
    path.write_text(SAMPLE_LOG, encoding="utf-8")
    return path
