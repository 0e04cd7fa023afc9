"""
Result Naming
=============

Derives the output name of every batch item:

    output_<op>_[coref_]<suffix>

``<op>`` is ``coref``, ``sim`` or ``re``; ``coref_`` is added for SIM/RE
when coreference runs first. ``<suffix>`` is the zero-padded 1-based index
for TEXT input, or the file base name / article id with whitespace runs
replaced by ``-``.

Names are deterministic and not unique across runs; writing to a file of
the same name overwrites it.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from pathlib import Path

from .models import InputSource, InvocationRequest, Operation

OUTPUT_PREFIX = "output_"
MIN_INDEX_WIDTH = 2

OPERATION_TAGS = {
    Operation.COREF: "coref_",
    Operation.SIM: "sim_",
    Operation.RE: "re_",
}

_WHITESPACE = re.compile(r"\s+")


def name_prefix(request: InvocationRequest) -> str:
    prefix = OUTPUT_PREFIX + OPERATION_TAGS[request.operation]
    if request.operation in (Operation.SIM, Operation.RE) and request.do_coreference:
        prefix += "coref_"
    return prefix


def index_width(batch_size: int) -> int:
    """Digits used for TEXT indices: at least two, more for large batches."""
    return max(MIN_INDEX_WIDTH, len(str(batch_size)))


def item_suffix(request: InvocationRequest, index: int) -> str:
    if request.input_source == InputSource.TEXT:
        return str(index + 1).zfill(index_width(len(request.inputs)))
    token = request.inputs[index]
    if request.input_source == InputSource.FILE:
        token = Path(token).name
    return _WHITESPACE.sub("-", token)


def name_results(results: Sequence[object], request: InvocationRequest) -> list[str]:
    """Return one output name per result, by batch position.

    Raises:
        IndexError: If there are more results than input tokens
    """
    count = len(results)
    if count > len(request.inputs):
        raise IndexError(f"Cannot name {count} results for {len(request.inputs)} inputs")
    prefix = name_prefix(request)
    return [prefix + item_suffix(request, i) for i in range(count)]
