#
# Paramutil - Sentinels Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import copy
import pickle

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from paramutil.sentinels import ABSENT, AbsentType, is_absent


# Tests ----------------------------------------------------------------------------------------------------------------

class TestAbsent:
    def test_singleton_identity(self):
        """Ensure the sentinel is a singleton object."""
        assert ABSENT is AbsentType()

    def test_repr_clean(self):
        """Assert repr shows clean angle-bracketed name."""
        assert repr(ABSENT) == "<ABSENT>"

    def test_falsy(self):
        """Check boolean conversion semantics."""
        assert bool(ABSENT) is False

    @pytest.mark.parametrize(
        "other",
        [
            pytest.param(None, id="none"),
            pytest.param(False, id="false"),
            pytest.param("", id="empty-str"),
            pytest.param(object(), id="object"),
        ],
    )
    def test_equality_with_non_sentinel(self, other):
        """Ensure equality with anything else is false."""
        assert (ABSENT == other) is False

    def test_hash_is_identity_based(self):
        """Confirm hash is consistent with identity."""
        assert hash(ABSENT) == id(ABSENT)

    def test_pickle_roundtrip(self):
        """Ensure pickling preserves singleton identity."""
        data = pickle.dumps(ABSENT, protocol=pickle.HIGHEST_PROTOCOL)
        assert pickle.loads(data) is ABSENT

    def test_copy_preserves_identity(self):
        """Ensure copies resolve to the singleton."""
        assert copy.copy(ABSENT) is ABSENT
        assert copy.deepcopy(ABSENT) is ABSENT


class TestIsAbsent:
    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param(ABSENT, True, id="absent"),
            pytest.param(None, False, id="none"),
            pytest.param(0, False, id="zero"),
        ],
    )
    def test_is_absent(self, value, expected):
        """Detect only the ABSENT sentinel."""
        assert is_absent(value) is expected
