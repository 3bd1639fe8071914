"""Request validation tests."""

import pytest
from hypothesis import given, strategies as st

from core import (
    GenerateRequest,
    RollbackRequest,
    SourceRequest,
)


@pytest.mark.unit
def test_generate_request_valid():
    req = GenerateRequest(prompt="  Create a calculator ")
    assert req.prompt == "Create a calculator"
    assert req.file is None


@pytest.mark.unit
def test_generate_request_alias():
    req = GenerateRequest.model_validate({"prompt": "x", "previousPlan": {"intent": "y"}})
    assert req.previous_plan == {"intent": "y"}


@pytest.mark.unit
@pytest.mark.parametrize("prompt", ["", "   "])
def test_generate_request_empty(prompt):
    with pytest.raises(Exception):
        GenerateRequest(prompt=prompt)


@pytest.mark.unit
def test_generate_request_extra_fields_forbidden():
    with pytest.raises(Exception):
        GenerateRequest.model_validate({"prompt": "x", "model": "gpt"})


@pytest.mark.unit
@pytest.mark.parametrize("file", ["../etc/passwd", "a/../../b", "  "])
def test_file_names_rejected(file):
    with pytest.raises(Exception):
        RollbackRequest(id="ver_x", file=file)


@pytest.mark.unit
def test_source_request_limit():
    with pytest.raises(Exception):
        SourceRequest(code="x" * (256 * 1024 + 1))


@pytest.mark.unit
@given(st.text(min_size=1, max_size=200).filter(lambda s: s.strip()))
def test_generate_request_property(prompt):
    """Any non-blank prompt validates and comes back stripped."""
    assert GenerateRequest(prompt=prompt).prompt == prompt.strip()
