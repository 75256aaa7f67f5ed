# tests/conftest.py
import pytest
import sys
from pathlib import Path

# Aggiunge src/ al path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from segments.intensity_segments import IntensitySegments  # noqa: E402
import shared.logger as logger_module  # noqa: E402

# =============================================================================
# STATO GLOBALE LOGGER
# =============================================================================

@pytest.fixture(autouse=True)
def quiet_segments_logger():
    """
    Logger disabilitato di default in ogni test.
    I test del logger lo riconfigurano esplicitamente.
    """
    logger_module.configure_segments_logger(enabled=False)
    yield
    logger_module.configure_segments_logger(enabled=False)

# =============================================================================
# FIXTURES INTENSITY SEGMENTS
# =============================================================================

@pytest.fixture
def segments():
    """Struttura vuota."""
    return IntensitySegments()

@pytest.fixture
def overlapping_segments():
    """
    Due range sovrapposti.
    add(10, 30, 1) + add(20, 40, 1)
    → [[10,1],[20,2],[30,1],[40,0]]
    """
    s = IntensitySegments()
    s.add(10, 30, 1)
    s.add(20, 40, 1)
    return s

@pytest.fixture
def segments_factory():
    """
    Factory per creare strutture da una lista di operazioni.

    Usage:
        def test_something(segments_factory):
            s = segments_factory([('add', 10, 30, 1), ('set', 20, 25, 4)])
    """
    def _create(operations=()):
        s = IntensitySegments()
        for op, from_, to, amount in operations:
            getattr(s, op)(from_, to, amount)
        return s

    return _create
