import logging
import sys
from pathlib import Path

import pytest

# Ensure the project src directory is on sys.path for test imports
PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


@pytest.fixture
def gedcom_logs(caplog):
    """
    caplog wired to the ``gedcom_fan`` base logger, which does not
    propagate to the root logger.
    """
    base = logging.getLogger("gedcom_fan")
    base.addHandler(caplog.handler)
    try:
        yield caplog
    finally:
        base.removeHandler(caplog.handler)


@pytest.fixture
def family_result():
    from gedcom_fan.extraction import extract_individuals
    from gedcom_fan.loader import load_gedcom_file
    from gedcom_fan.utils import tests_data_path

    return extract_individuals(load_gedcom_file(tests_data_path("family.ged")))
