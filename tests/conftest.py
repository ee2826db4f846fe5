#
# Pytest Fixtures
#

# Standard library -----------------------------------------------------------------------------------------------------
import pathlib

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from shapes import Diamond


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture
def diamond() -> Diamond:
    """Instance whose class inherits Base through two branches."""
    return Diamond()


@pytest.fixture
def text_file(tmp_path: pathlib.Path):
    """Yield an open text file handle, closed on teardown."""
    path = tmp_path / "data.txt"
    path.write_text("line\n")
    with open(path) as f:
        yield f
