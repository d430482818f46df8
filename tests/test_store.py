"""Tests for the document store."""

from __future__ import annotations

from pathlib import Path

from skilldex.store import DocumentStore


class TestLoad:
    def test_loads_valid_documents_only(self, skill_tree: Path):
        store = DocumentStore()
        loaded = store.load(skill_tree)

        assert loaded == 2
        assert [d.name for d in store.list_documents()] == ["ci-cd", "docker"]
        assert str(skill_tree / "broken" / "SKILL.md") in store.skipped
        assert str(skill_tree / "README.md") in store.ignored
        assert str(skill_tree / "ci-cd" / "references" / "workflows.md") in store.ignored

    def test_list_is_lazy(self, skill_tree: Path):
        store = DocumentStore()
        store.load(skill_tree)
        docs = store.list_documents()
        assert next(docs).name == "ci-cd"
        assert iter(docs) is docs

    def test_get(self, skill_tree: Path):
        store = DocumentStore()
        store.load(skill_tree)
        assert store.get("docker").domain == "devops"
        assert store.get("missing") is None
        assert "docker" in store
        assert len(store) == 2

    def test_extension_filter(self, tmp_path: Path):
        (tmp_path / "a.txt").write_text("---\nname: a\n---\n")
        (tmp_path / "b.md").write_text("---\nname: b\n---\n")
        store = DocumentStore(extension="txt")
        store.load(tmp_path)
        assert store.names() == ["a"]

    def test_excluded_dirs(self, tmp_path: Path, make_skill):
        make_skill(tmp_path / "node_modules", "pkg", "name: pkg\n")
        make_skill(tmp_path, "kept", "name: kept\n")
        store = DocumentStore()
        store.load(tmp_path)
        assert store.names() == ["kept"]

    def test_disabled_skills(self, skill_tree: Path):
        store = DocumentStore(disabled=["docker"])
        store.load(skill_tree)
        assert store.names() == ["ci-cd"]

    def test_unreadable_file_skipped(self, tmp_path: Path, make_skill):
        (tmp_path / "bad.md").write_bytes(b"---\nname: \xff\xfe\n---\n")
        make_skill(tmp_path, "good", "name: good\n")
        store = DocumentStore()
        assert store.load(tmp_path) == 1
        assert str(tmp_path / "bad.md") in store.skipped


class TestDuplicates:
    def test_later_document_wins(self, tmp_path: Path, make_skill):
        make_skill(tmp_path, "a-first", "name: docker\ndescription: first\n")
        make_skill(tmp_path, "b-second", "name: docker\ndescription: second\n")
        store = DocumentStore()
        store.load(tmp_path)

        docs = list(store.list_documents())
        assert len(docs) == 1
        assert docs[0].description == "second"
        assert len(store.warnings) == 1
        assert "Duplicate skill name 'docker'" in store.warnings[0]

    def test_replaced_document_moves_to_end(self, tmp_path: Path, make_skill):
        make_skill(tmp_path, "a", "name: dup\n")
        make_skill(tmp_path, "b", "name: other\n")
        make_skill(tmp_path, "c", "name: dup\n")
        store = DocumentStore()
        store.load(tmp_path)
        assert store.names() == ["other", "dup"]


class TestFailureIsolation:
    def test_impossible_date_does_not_abort_load(self, tmp_path: Path, make_skill):
        make_skill(tmp_path, "a-bad", "name: bad\nupdated: 2024-02-30\n")
        make_skill(tmp_path, "b-good", "name: good\n")
        store = DocumentStore()
        assert store.load(tmp_path) == 1
        assert store.names() == ["good"]
        assert "invalid YAML" in store.skipped[str(tmp_path / "a-bad" / "SKILL.md")]

    def test_malformed_url_does_not_abort_load(self, tmp_path: Path, make_skill):
        make_skill(tmp_path, "a-bad", "name: bad\nreferences:\n  - 'http://[::1'\n")
        make_skill(tmp_path, "b-good", "name: good\n")
        store = DocumentStore()
        assert store.load(tmp_path) == 1
        assert "invalid URL" in store.skipped[str(tmp_path / "a-bad" / "SKILL.md")]

    def test_empty_tag_list_skipped(self, tmp_path: Path, make_skill):
        make_skill(tmp_path, "a-bad", "name: bad\ntags: []\n")
        make_skill(tmp_path, "b-good", "name: good\n")
        store = DocumentStore()
        assert store.load(tmp_path) == 1
        assert store.get("bad") is None

    def test_empty_copy_keeps_settings_only(self, skill_tree: Path):
        store = DocumentStore(extension="txt", disabled=["docker"])
        store.load(skill_tree)
        copy = store.empty_copy()
        assert copy.extension == ".txt"
        assert copy.disabled == {"docker"}
        assert len(copy) == 0
        assert copy.skipped == {} and copy.ignored == [] and copy.warnings == []
