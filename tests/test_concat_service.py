"""Tests for ConcatService"""

import pytest

from repo2file.application.concat_service import ConcatService
from repo2file.domain.errors import FileReadError, OutputError
from repo2file.domain.models.exclusion import DefaultExclusionSet
from repo2file.domain.models.filter_request import IgnoreRequest, IncludeRequest
from repo2file.infrastructure.file_walker import LocalFileWalker
from repo2file.infrastructure.inclusion_policy import InclusionPolicy


@pytest.fixture
def source_tree(tmp_path):
    """src/main.rs, node_modules/pkg/index.js and Cargo.lock under tmp_path/repo"""
    root = tmp_path / "repo"
    (root / "src").mkdir(parents=True)
    (root / "node_modules" / "pkg").mkdir(parents=True)
    (root / "src" / "main.rs").write_text("fn main()\n", encoding="utf-8")
    (root / "node_modules" / "pkg" / "index.js").write_text("module.exports = 1;\n", encoding="utf-8")
    (root / "Cargo.lock").write_text("# lock\n", encoding="utf-8")
    return root


def _service(request=None):
    return ConcatService(InclusionPolicy(DefaultExclusionSet.builtin(), request))


class TestConcatService:
    """Tests for ConcatService.run"""

    def test_defaults_keep_only_sources(self, source_tree, tmp_path):
        """Test default rules drop node_modules and Cargo.lock"""
        out = tmp_path / "out.txt"

        summary = _service().run(source_tree, out)

        main_rs = source_tree / "src" / "main.rs"
        assert out.read_text(encoding="utf-8") == f"\n\n// File: {main_rs}\n\nfn main()\n"
        assert summary.files_found == 3
        assert summary.files_included == 1
        assert summary.files_excluded == 2
        assert summary.bytes_written == len(out.read_bytes())

    def test_include_mode(self, source_tree, tmp_path):
        """Test *.rs include list yields only main.rs"""
        out = tmp_path / "out.txt"

        summary = _service(IncludeRequest(include_files=("*.rs",))).run(source_tree, out)

        content = out.read_text(encoding="utf-8")
        assert content.count("// File: ") == 1
        assert "main.rs" in content
        assert "index.js" not in content
        assert summary.files_included == 1

    def test_user_ignores(self, source_tree, tmp_path):
        """Test ignoring the src directory leaves nothing"""
        out = tmp_path / "out.txt"

        summary = _service(IgnoreRequest(ignore_dirs=("src",))).run(source_tree, out)

        assert out.read_text(encoding="utf-8") == ""
        assert summary.files_included == 0

    def test_idempotent(self, source_tree, tmp_path):
        """Test two runs produce byte-identical output"""
        (source_tree / "src" / "lib.rs").write_text("pub fn f() {}\n", encoding="utf-8")
        (source_tree / "README.md").write_text("# Repo\n", encoding="utf-8")
        first, second = tmp_path / "first.txt", tmp_path / "second.txt"

        _service().run(source_tree, first)
        _service().run(source_tree, second)

        assert first.read_bytes() == second.read_bytes()

    def test_empty_tree(self, tmp_path):
        """Test zero included files still produces an empty output file"""
        root = tmp_path / "empty"
        root.mkdir()
        out = tmp_path / "out.txt"

        summary = _service().run(root, out)

        assert out.exists()
        assert out.read_text(encoding="utf-8") == ""
        assert summary.files_found == 0

    def test_output_inside_tree_is_skipped(self, source_tree):
        """Test the output file is never read back into itself"""
        out = source_tree / "bundle.md"

        summary = _service().run(source_tree, out)

        assert "bundle.md" not in out.read_text(encoding="utf-8")
        assert summary.files_included == 1

    def test_unreadable_file_aborts(self, source_tree, tmp_path):
        """Test invalid text aborts the run, keeping partial output"""
        (source_tree / "src" / "zz_blob.rs").write_bytes(b"\xff\xfe\xfd")
        out = tmp_path / "out.txt"

        with pytest.raises(FileReadError, match="zz_blob.rs"):
            _service().run(source_tree, out)

        assert "main.rs" in out.read_text(encoding="utf-8")

    def test_output_not_creatable(self, source_tree, tmp_path):
        """Test output path that is a directory fails before traversal"""
        walker = LocalFileWalker()
        service = ConcatService(InclusionPolicy(DefaultExclusionSet.builtin()), walker=walker)

        with pytest.raises(OutputError):
            service.run(source_tree, tmp_path)

    def test_custom_emitter_factory(self, source_tree, tmp_path):
        """Test emitter factory receives the output path"""
        from repo2file.infrastructure.emitter import RecordEmitter

        seen = []

        def factory(path):
            seen.append(path)
            return RecordEmitter(path)

        service = ConcatService(
            InclusionPolicy(DefaultExclusionSet.builtin()), emitter_factory=factory
        )
        out = tmp_path / "out.txt"
        service.run(source_tree, out)

        assert seen == [out]
