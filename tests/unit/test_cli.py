"""
CLI Unit Tests
Tests for mcm_cli/main.py and mcm_cli/commands/
"""
import json

import pytest

from fixtures import SIGNER_A, SIGNER_B, SIGNER_C, SIGNER_D, make_proposal_dict

from mcm.crypto.hashing import keccak256, to_hex
from mcm.proposal import compute_hash_to_sign, compute_proposal_root, load_proposal
from mcm_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
)
from mcm_cli.main import create_parser, main


NESTED = f"m:root:1o2(s:{SIGNER_A},m:child:2o3(s:{SIGNER_B},s:{SIGNER_C},s:{SIGNER_D}))"


class TestParser:
    """Tests for argument parsing."""

    def test_no_command(self, capsys):
        assert main([]) == EXIT_RUNTIME_ERROR

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            create_parser().parse_args(["--version"])
        assert exc_info.value.code == 0
        assert "mcm" in capsys.readouterr().out

    def test_root_requires_file(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["root"])


class TestRootCommand:
    """Tests for `mcm root`."""

    def test_json_output(self, proposal_file, capsys):
        assert main(["root", str(proposal_file), "--json"]) == EXIT_SUCCESS

        out = json.loads(capsys.readouterr().out)
        proposal = load_proposal(proposal_file)
        result = compute_proposal_root(proposal)

        assert out["root"] == to_hex(result.root)
        assert out["hash_to_sign"] == to_hex(
            compute_hash_to_sign(result.root, proposal.valid_until)
        )
        assert out["operations"][0]["nonce"] == 4
        assert len(out["operations"]) == 1

    def test_human_output(self, proposal_file, capsys):
        assert main(["root", str(proposal_file)]) == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert "root: 0x" in out
        assert "nonce 4" in out

    def test_multiple_files(self, tmp_path, capsys):
        paths = []
        for i in range(3):
            path = tmp_path / f"p{i}.json"
            path.write_text(json.dumps(make_proposal_dict(validUntil=1000 + i)))
            paths.append(str(path))

        assert main(["root", *paths, "--json", "--workers", "2"]) == EXIT_SUCCESS
        out = json.loads(capsys.readouterr().out)
        assert [entry["valid_until"] for entry in out] == [1000, 1001, 1002]

    def test_invalid_proposal_lists_issues(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps(make_proposal_dict(multisigId="0x12", validUntil=-1)))

        assert main(["root", str(path)]) == EXIT_RUNTIME_ERROR
        err = capsys.readouterr().err
        assert "SCHEMA_VALIDATION_ERROR" in err
        assert "multisigId" in err
        assert "validUntil" in err

    def test_non_utf8_file(self, tmp_path, capsys):
        path = tmp_path / "binary.json"
        path.write_bytes(b'{"multisigId": "\xff\xfe"}')

        assert main(["root", str(path)]) == EXIT_RUNTIME_ERROR
        assert "SCHEMA_VALIDATION_ERROR" in capsys.readouterr().err

    def test_output_format_from_env(self, proposal_file, capsys, monkeypatch):
        monkeypatch.setenv("MCM_OUTPUT_FORMAT", "json")
        assert main(["root", str(proposal_file)]) == EXIT_SUCCESS
        assert "root" in json.loads(capsys.readouterr().out)


class TestHashCommand:
    """Tests for `mcm hash`."""

    def test_hash(self, capsys):
        root = keccak256(b"root")
        assert main(["hash", "--root", to_hex(root), "--valid-until", "42", "--json"]) == EXIT_SUCCESS

        out = json.loads(capsys.readouterr().out)
        assert out["hash_to_sign"] == to_hex(compute_hash_to_sign(root, 42))

    def test_bad_root(self, capsys):
        assert main(["hash", "--root", "0x1234", "--valid-until", "1"]) == EXIT_RUNTIME_ERROR

    @pytest.mark.parametrize("valid_until", [0, 2**32])
    def test_bad_valid_until(self, capsys, valid_until):
        root = to_hex(keccak256(b"root"))
        assert main(["hash", "--root", root, "--valid-until", str(valid_until)]) == EXIT_RUNTIME_ERROR


class TestHierarchyCommand:
    """Tests for `mcm hierarchy`."""

    def test_json(self, capsys):
        assert main(["hierarchy", NESTED, "--json"]) == EXIT_SUCCESS

        out = json.loads(capsys.readouterr().out)
        assert out["num_groups"] == 2
        assert out["group_quorums"][:2] == [1, 2]
        assert out["group_parents"][:2] == [0, 0]
        assert out["signer_groups"] == [0, 1, 1, 1]
        assert len(out["group_quorums"]) == 32

    def test_human(self, capsys):
        assert main(["hierarchy", NESTED]) == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert "root:1o2 (group 0)" in out
        assert "child:2o3 (group 1)" in out

    def test_syntax_error(self, capsys):
        assert main(["hierarchy", "m:root:1o2(s:0xZZZZ)"]) == EXIT_RUNTIME_ERROR
        err = capsys.readouterr().err
        assert "HIERARCHY_SYNTAX_ERROR" in err
        assert "0xZZZZ" in err


class TestVerifyCommand:
    """Tests for `mcm verify`."""

    def test_verify_ok(self, proposal_file, capsys):
        root = compute_proposal_root(load_proposal(proposal_file)).root
        assert main(["verify", str(proposal_file), "--root", to_hex(root), "--json"]) == EXIT_SUCCESS

        out = json.loads(capsys.readouterr().out)
        assert out["proofs_ok"] is True
        assert out["root_matches"] is True

    def test_verify_without_root(self, proposal_file, capsys):
        assert main(["verify", str(proposal_file)]) == EXIT_SUCCESS
        assert "proofs_ok: true" in capsys.readouterr().out

    def test_root_mismatch(self, proposal_file, capsys):
        other = to_hex(keccak256(b"other"))
        assert main(["verify", str(proposal_file), "--root", other, "--json"]) == EXIT_VERIFICATION_FAILED

        out = json.loads(capsys.readouterr().out)
        assert out["root_matches"] is False
        assert "ROOT_MISMATCH" in out["errors"][0]

    def test_missing_file(self, tmp_path, capsys):
        assert main(["verify", str(tmp_path / "nope.json")]) == EXIT_RUNTIME_ERROR


class TestConfigCommand:
    """Tests for `mcm config`."""

    def test_init_and_show(self, tmp_path, capsys):
        path = tmp_path / "mcm.json"
        assert main(["config", "--init", "--path", str(path)]) == EXIT_SUCCESS
        assert path.exists()

        # A second init refuses to overwrite
        assert main(["config", "--init", "--path", str(path)]) == EXIT_RUNTIME_ERROR
        capsys.readouterr()

        assert main(["--config", str(path), "config", "--show"]) == EXIT_SUCCESS
        shown = json.loads(capsys.readouterr().out)
        assert shown["log_level"] == "INFO"
        assert shown["default_output_format"] == "human"

    def test_invalid_config_file(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text("{broken")
        assert main(["--config", str(path), "config", "--show"]) == EXIT_RUNTIME_ERROR
        assert "Error loading configuration" in capsys.readouterr().err
