"""
Shared pytest fixtures for covreport tests.

All fixtures are pure-Python text: no compiler, no JS runtime.  Data
lines are built with ``encode_vlq_values`` so the decoded numbers stay
readable next to the point they describe.
"""
import json
import textwrap

import pytest

from covreport.core.mapping_parser import parse_mapping
from covreport.core.vlq import CharCursor, decode_vlq, encode_vlq_values


def decode_vlq_values(encoded, count):
    """Decode exactly *count* integers from the start of *encoded*."""
    cursor = CharCursor(encoded)
    return [decode_vlq(cursor) for _ in range(count)]


def data_line(point_id, file_idx, func_idx, type_idx, line, column):
    return f"{point_id}:{encode_vlq_values([file_idx, func_idx, type_idx, line, column])}"


HEADER = textwrap.dedent("""\
    FileNames:["src/b.js","src/a.js"]
    FunctionNames:["main","helper","<anonymous>"]
    Types:["FUNCTION","BRANCH","BRANCH_DEFAULT"]
""")

# id     file      function      type            line col
#  C0    src/b.js  main          FUNCTION          10   2
#  C1    src/b.js  main          BRANCH            12   4
#  C2    src/a.js  helper        FUNCTION           3   0
#  C3    src/a.js  helper        BRANCH             5   6
#  C4    src/a.js  <anonymous>   BRANCH_DEFAULT     5   0
#  C5    src/b.js  main          BRANCH             1   0
MAPPING_TEXT = HEADER + "\n".join([
    data_line("C0", 0, 0, 0, 10, 2),
    data_line("C1", 0, 0, 1, 12, 4),
    data_line("C2", 1, 1, 0, 3, 0),
    data_line("C3", 1, 1, 1, 5, 6),
    data_line("C4", 1, 2, 2, 5, 0),
    data_line("C5", 0, 0, 1, 1, 0),
]) + "\n"

FREQUENCIES = {"C0": 3, "C2": 7, "C4": 1, "ZZ": 99}

# Compiled output where the optimizer dropped C1 and C3.
PROGRAM_TEXT = textwrap.dedent("""\
    var ist_arr=[];function main(){ist_arr.push('C0');if(x){ist_arr.push("C5")}}
    function helper(){ist_arr.push('C2');}
    (function(){ist_arr.push('C4')})();other.push('C1');
""")

SINGLE_POINT_MAPPING = (
    'FileNames:["a.js"]\n'
    'FunctionNames:["f"]\n'
    'Types:["FUNCTION"]\n'
    'X1:AAAAA\n'
)


@pytest.fixture
def mapping_text():
    return MAPPING_TEXT


@pytest.fixture
def mapping():
    return parse_mapping(MAPPING_TEXT)


@pytest.fixture
def frequencies():
    return dict(FREQUENCIES)


@pytest.fixture
def program_text():
    return PROGRAM_TEXT


@pytest.fixture
def mapping_file(tmp_path):
    p = tmp_path / "mapping.txt"
    p.write_text(MAPPING_TEXT, encoding="utf-8")
    return p


@pytest.fixture
def report_file(tmp_path):
    p = tmp_path / "report.json"
    p.write_text(json.dumps(FREQUENCIES), encoding="utf-8")
    return p


@pytest.fixture
def binary_file(tmp_path):
    p = tmp_path / "app.js"
    p.write_text(PROGRAM_TEXT, encoding="utf-8")
    return p
