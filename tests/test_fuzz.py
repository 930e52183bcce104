from __future__ import annotations

import os

import pytest
from md2roff import RoffConfig, UnterminatedCodeSpanError, convert_markdown, squeeze
from md2roff.dialects import DIALECT_NAMES

atheris = pytest.importorskip("atheris")


def test_squeeze_with_fuzzed_input():
    data = os.urandom(4096)
    provider = atheris.FuzzedDataProvider(data)
    seen = 0

    for _ in range(128):
        if provider.remaining_bytes() == 0:
            break
        text = provider.ConsumeUnicodeNoSurrogates(64)
        squeezed = squeeze(text)
        assert "  " not in squeezed
        assert squeeze(squeezed) == squeezed
        seen += 1

    assert seen  # ensure we exercised the loop


def test_convert_markdown_with_fuzzed_documents():
    data = os.urandom(8192)
    provider = atheris.FuzzedDataProvider(data)

    for dialect in DIALECT_NAMES:
        content = provider.ConsumeUnicodeNoSurrogates(512)
        try:
            output = convert_markdown(content, RoffConfig(dialect=dialect, max_list_depth=4))
        except UnterminatedCodeSpanError as error:
            assert error.line_number >= 1
            continue
        assert output.startswith('.\\" x-roff document\n')
