"""
CLI Tests
Exercise merkle_cli.main.main() end to end: commit, prove, verify, demo, config.
"""
import json
from pathlib import Path

import pytest

from merkle_cli.main import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    create_parser,
    main,
)
from fixtures.golden import GOLDEN_ROOTS


ABCD_ARGS = ["--item", "A", "--item", "B", "--item", "C", "--item", "D"]


class TestParser:
    """Tests for argument parsing."""

    def test_no_command_returns_error(self, capsys):
        assert main([]) == EXIT_RUNTIME_ERROR

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            create_parser().parse_args(["--version"])

        assert exc_info.value.code == 0
        assert "0.1.0" in capsys.readouterr().out

    def test_verify_requires_item_source(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["verify", "proof.json"])


class TestCommitCommand:
    """Tests for `merkle commit`."""

    def test_commit_prints_root(self, capsys):
        assert main(["commit", *ABCD_ARGS]) == EXIT_SUCCESS

        out = capsys.readouterr().out
        assert f"root: {GOLDEN_ROOTS[4]}" in out
        assert "leaves: 4" in out

    def test_commit_json(self, capsys):
        assert main(["commit", *ABCD_ARGS[:6], "--json", "--show-leaves"]) == EXIT_SUCCESS

        data = json.loads(capsys.readouterr().out)
        assert data["root"] == GOLDEN_ROOTS[3]
        assert data["num_leaves"] == 3
        assert data["height"] == 2
        assert len(data["leaves"]) == 3

    def test_commit_from_lines_file(self, tmp_path, capsys):
        lines = tmp_path / "items.txt"
        lines.write_text("A\nB\nC\nD\nE\n")

        assert main(["commit", "--lines", str(lines), "--json"]) == EXIT_SUCCESS
        assert json.loads(capsys.readouterr().out)["root"] == GOLDEN_ROOTS[5]

    def test_commit_from_files(self, tmp_path, capsys):
        for name in "ABC":
            (tmp_path / name).write_bytes(name.encode())

        args = ["commit", "--json"]
        for name in "ABC":
            args += ["--file", str(tmp_path / name)]

        assert main(args) == EXIT_SUCCESS
        assert json.loads(capsys.readouterr().out)["root"] == GOLDEN_ROOTS[3]

    def test_commit_without_items_fails(self, capsys):
        assert main(["commit"]) == EXIT_RUNTIME_ERROR
        assert "empty" in capsys.readouterr().err

    def test_commit_without_items_json_error(self, capsys):
        assert main(["--log-level", "ERROR", "commit", "--json"]) == EXIT_RUNTIME_ERROR

        error = json.loads(capsys.readouterr().err)
        assert error["code"] == "EMPTY_INPUT"

    def test_missing_lines_file(self, capsys):
        assert main(["commit", "--lines", "nope.txt"]) == EXIT_RUNTIME_ERROR
        assert "Error" in capsys.readouterr().err


class TestProveAndVerify:
    """Tests for `merkle prove` followed by `merkle verify`."""

    def test_prove_to_file_then_verify(self, tmp_path, capsys):
        proof_path = tmp_path / "proof.json"

        assert main(["prove", "--index", "2", *ABCD_ARGS, "--out", str(proof_path)]) == EXIT_SUCCESS
        proof = json.loads(proof_path.read_text())
        assert proof["root"] == GOLDEN_ROOTS[4]
        assert len(proof["siblings"]) == 2

        capsys.readouterr()
        assert main(["verify", str(proof_path), "--item", "C"]) == EXIT_SUCCESS
        assert "valid: true" in capsys.readouterr().out

    def test_verify_modified_item_fails(self, tmp_path, capsys):
        proof_path = tmp_path / "proof.json"
        main(["prove", "--index", "2", *ABCD_ARGS, "--out", str(proof_path)])
        capsys.readouterr()

        assert main(["verify", str(proof_path), "--item", "C*", "--json"]) == EXIT_VERIFICATION_FAILED

        report = json.loads(capsys.readouterr().out)
        assert report["valid"] is False
        assert report["index"] == 2
        assert report["code"] == "MERKLE_PROOF_INVALID"

    def test_prove_to_stdout(self, capsys):
        assert main(["prove", "-n", "0", *ABCD_ARGS[:6]]) == EXIT_SUCCESS

        proof = json.loads(capsys.readouterr().out)
        assert proof["index"] == 0
        assert proof["total_leaves"] == 3

    def test_verify_from_item_file(self, tmp_path, capsys):
        proof_path = tmp_path / "proof.json"
        item_path = tmp_path / "item.bin"
        item_path.write_bytes(b"B")
        main(["prove", "--index", "1", *ABCD_ARGS, "--out", str(proof_path)])

        assert main(["verify", str(proof_path), "--file", str(item_path)]) == EXIT_SUCCESS

    def test_prove_index_out_of_range(self, capsys):
        assert main(["prove", "--index", "4", *ABCD_ARGS]) == EXIT_RUNTIME_ERROR
        assert "out of range" in capsys.readouterr().err

    def test_verify_corrupt_proof_file(self, tmp_path, capsys):
        proof_path = tmp_path / "proof.json"
        proof_path.write_text("{\"root\": 1}")

        assert main(["verify", str(proof_path), "--item", "C"]) == EXIT_RUNTIME_ERROR
        assert "Invalid inclusion proof" in capsys.readouterr().err

    def test_verify_missing_proof_file(self, capsys):
        assert main(["verify", "missing.json", "--item", "C"]) == EXIT_RUNTIME_ERROR


class TestInputErrors:
    """Bad encodings and undecodable files end with exit code 1, not a traceback."""

    def test_unknown_item_encoding(self, monkeypatch, capsys):
        monkeypatch.setenv("MERKLE_ITEM_ENCODING", "bogus")

        assert main(["commit", "--item", "A"]) == EXIT_RUNTIME_ERROR
        assert "item_encoding" in capsys.readouterr().err

    def test_item_not_encodable(self, monkeypatch, capsys):
        monkeypatch.setenv("MERKLE_ITEM_ENCODING", "ascii")

        assert main(["commit", "--item", "\u6570\u636e"]) == EXIT_RUNTIME_ERROR
        assert "Error:" in capsys.readouterr().err

    def test_lines_file_not_utf8(self, tmp_path, capsys):
        lines = tmp_path / "items.txt"
        lines.write_bytes(b"A\n\xff\xfe\n")

        assert main(["commit", "--lines", str(lines)]) == EXIT_RUNTIME_ERROR
        assert "Error:" in capsys.readouterr().err

    def test_proof_file_not_utf8(self, tmp_path, capsys):
        proof_path = tmp_path / "proof.json"
        proof_path.write_bytes(b"\xff\xfe{")

        assert main(["verify", str(proof_path), "--item", "C"]) == EXIT_RUNTIME_ERROR
        assert "not UTF-8" in capsys.readouterr().err

    def test_config_file_not_utf8(self, capsys):
        Path("merkle.json").write_bytes(b"\xff\xfe{")

        assert main(["commit", "--item", "A"]) == EXIT_RUNTIME_ERROR
        assert "configuration" in capsys.readouterr().err

    def test_config_wrong_type(self, capsys):
        Path("merkle.json").write_text(json.dumps({"demo_index": "2"}))

        assert main(["demo"]) == EXIT_RUNTIME_ERROR
        assert "demo_index must be an integer" in capsys.readouterr().err


class TestDemoCommand:
    """Tests for `merkle demo`."""

    def test_demo_human(self, capsys):
        assert main(["demo"]) == EXIT_SUCCESS

        out = capsys.readouterr().out
        assert "Root digest:" in out
        assert "Proof contains 2 digests" in out
        assert "as expected" in out

    def test_demo_json(self, capsys):
        assert main(["demo", "--json", "--index", "0"]) == EXIT_SUCCESS

        report = json.loads(capsys.readouterr().out)
        assert report["ok"] is True
        assert report["index"] == 0
        assert report["valid_item_accepted"] is True
        assert report["modified_item_rejected"] is True

    def test_demo_uses_config_items(self, capsys):
        Path("merkle.json").write_text(json.dumps({"demo_items": ["A", "B", "C"], "demo_index": 2}))

        assert main(["demo", "--json"]) == EXIT_SUCCESS

        report = json.loads(capsys.readouterr().out)
        assert report["root"] == GOLDEN_ROOTS[3]
        assert len(report["proof"]) == 1

    def test_demo_bad_index(self, capsys):
        assert main(["demo", "--index", "9"]) == EXIT_RUNTIME_ERROR


class TestConfigCommand:
    """Tests for `merkle config`."""

    def test_init_then_show(self, capsys):
        assert main(["config", "--init"]) == EXIT_SUCCESS
        assert Path("merkle.json").exists()

        assert main(["config", "--init"]) == EXIT_RUNTIME_ERROR

        capsys.readouterr()
        assert main(["config", "--show"]) == EXIT_SUCCESS
        shown = json.loads(capsys.readouterr().out)
        assert shown["demo_index"] == 2

    def test_invalid_config_file(self, capsys):
        Path("merkle.json").write_text("{")

        assert main(["commit", "--item", "A"]) == EXIT_RUNTIME_ERROR
        assert "configuration" in capsys.readouterr().err
