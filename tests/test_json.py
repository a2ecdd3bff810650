import ast
import json
import logging
import re
from pathlib import Path

import json_pretty_compact
from json_pretty_compact import FormatterConfig, dump, dumps

logger = logging.getLogger(json_pretty_compact.__name__)


test_data_path = Path(__file__).parent / "data"


def read_ref(ref_filename):
    """Split a reference file into config overrides and expected output."""
    params = {}
    ref_json = ""
    with open(ref_filename) as f:
        for line in f.readlines():
            if line.startswith("@"):
                (param, value) = re.split(r"\s*=\s*", line[1:], maxsplit=1)
                params[param] = ast.literal_eval(value.strip())
            else:
                ref_json += line
    # No final newline
    return FormatterConfig(**params), ref_json.rstrip()


def test_json(pytestconfig):
    if pytestconfig.getoption("test_verbose"):
        print("\n")

    if pytestconfig.getoption("test_debug"):
        logger.setLevel("DEBUG")

    if pytestconfig.getoption("test_file") is not None:
        ref_filename = pytestconfig.getoption("test_file")
        source_filenames = [Path(re.sub(r"[.]ref.*", ".json", ref_filename))]
    else:
        source_filenames = sorted(test_data_path.rglob("*.json"))

    n_refs = 0
    for source_filename in source_filenames:
        if source_filename.match("*.ref*"):
            continue

        with open(source_filename) as f:
            obj = json.load(f)

        if pytestconfig.getoption("test_file") is not None:
            ref_filenames = [pytestconfig.getoption("test_file")]
        else:
            ref_filenames = sorted(test_data_path.rglob(source_filename.stem + ".ref*"))

        for ref_filename in ref_filenames:
            if pytestconfig.getoption("test_verbose"):
                print(f"*** Testing {ref_filename}")
            config, ref_json = read_ref(ref_filename)

            json_string = dumps(obj, config)

            if pytestconfig.getoption("test_verbose") and json_string != ref_json:
                json_string_dbg = ">" + re.sub(r"\n", "<\n>", json_string) + "<"
                ref_json_dbg = ">" + re.sub(r"\n", "<\n>", ref_json) + "<"
                print("===== TEST")
                print(json_string_dbg)
                print("===== REF")
                print(ref_json_dbg)
                print("=====")

            assert json_string == ref_json
            assert json.loads(json_string) == obj
            n_refs += 1

    assert n_refs > 0


def test_dump(tmp_path):
    tmp_file = tmp_path / "test.json"
    source_filename = test_data_path / "test-bool.json"
    with open(source_filename) as f:
        obj = json.load(f)
    dump(obj, tmp_file, newline_at_eof=False)
    assert (
        tmp_file.read_text()
        == '{ "bools": { "true": true, "false": false }, "none": null }'
    )


def test_dump_crlf(tmp_path):
    from json_pretty_compact import EolStyle

    tmp_file = tmp_path / "test.json"
    config = FormatterConfig(max_width=10, eol_style=EolStyle.CRLF)
    dump({"abc": [1, 2]}, tmp_file, config)
    assert tmp_file.read_bytes() == b'{\r\n  "abc": [\r\n    1,\r\n    2\r\n  ]\r\n}\r\n'


def test_dump_to_open_file(tmp_path):
    tmp_file = tmp_path / "test.json"
    with open(tmp_file, "w") as fh:
        dump([1, 2, 3], fh)
    assert tmp_file.read_text() == "[ 1, 2, 3 ]\n"
