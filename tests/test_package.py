"""Tests for tapline package exports and metadata."""

import pytest

import tapline


class TestPackageMetadata:
    """Package-level exports and metadata."""

    def test_version_string(self) -> None:
        assert isinstance(tapline.__version__, str)
        assert "0.1.0" in tapline.__version__

    def test_free_threading_declaration(self) -> None:
        assert tapline._Py_mod_gil == 0

    def test_all_exports_resolvable(self) -> None:
        for name in tapline.__all__:
            getattr(tapline, name)

    def test_lazy_export_identity(self) -> None:
        from tapline.provider import Provider

        assert tapline.Provider is Provider

    def test_invalid_attribute_raises(self) -> None:
        with pytest.raises(AttributeError, match="no attribute"):
            tapline.nonexistent_thing  # type: ignore[attr-defined]  # noqa: B018
