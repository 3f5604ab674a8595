"""Verify package imports work correctly."""


def test_import_glint() -> None:
    """Test that glint can be imported and version matches pyproject."""
    import tomllib
    from pathlib import Path

    import glint

    with (Path(__file__).resolve().parent.parent / "pyproject.toml").open("rb") as f:
        expected = tomllib.load(f)["project"]["version"]
    assert glint.__version__ == expected


def test_version_format() -> None:
    """Test version string format."""
    from glint import __version__

    parts = __version__.split(".")
    assert len(parts) == 3
    assert all(part.isdigit() for part in parts)


def test_public_names_exported() -> None:
    """Every name in __all__ resolves."""
    import glint

    for name in glint.__all__:
        assert hasattr(glint, name), name
