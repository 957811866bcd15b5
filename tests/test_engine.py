import gzip

from gemscribe.core.config import ParserConfig
from gemscribe.core.engine import GemParseEngine
from gemscribe.sinks.collector import RecordCollector

from conftest import TROLLOP_SPEC, build_gem, spec_for


def test_single_gem_end_to_end(trollop_gem, recorder):
    status = GemParseEngine(recorder).parse([str(trollop_gem)])

    assert status == 0
    kinds = recorder.kinds()
    assert kinds[:3] == ["parse_start", "gem_start", "gem_metadata"]
    assert kinds[-2:] == ["gem_end", "parse_end"]
    assert "error" not in kinds
    assert recorder.of_kind("gem_metadata")[0][1] == TROLLOP_SPEC
    assert recorder.of_kind("gem_start")[0][1] == str(trollop_gem)


def test_event_grammar_over_several_gems(tmp_path, recorder):
    for name in ("alpha", "beta", "gamma"):
        build_gem(tmp_path / f"{name}-1.0.gem", metadata=spec_for(name, "1.0"))

    GemParseEngine(recorder).parse([str(tmp_path)])

    kinds = recorder.kinds()
    assert kinds.count("gem_start") == kinds.count("gem_end") == 3
    depth = 0
    for kind in kinds[1:-1]:
        if kind == "gem_start":
            depth += 1
        elif kind == "gem_end":
            depth -= 1
        elif kind == "attribute":
            assert depth == 1
        assert depth in (0, 1)
    # Sorted, non-recursive glob
    names = [value for key, value in recorder.attributes() if key == "name"]
    assert names == ["alpha", "beta", "gamma"]


def test_directory_with_one_corrupt_archive(tmp_path):
    build_gem(tmp_path / "good-1.0.gem", metadata=spec_for("good", "1.0"))
    (tmp_path / "bad-1.0.gem").write_bytes(b"definitely not a tar archive")

    collector = RecordCollector()
    status = GemParseEngine(collector).parse([str(tmp_path)])

    assert status != 0
    assert [r.name for r in collector.records] == ["good"]
    assert len(collector.failed) == 1
    assert collector.failed[0].path.endswith("bad-1.0.gem")
    assert collector.failed[0].errors


def test_missing_input_does_not_stop_the_rest(tmp_path, recorder):
    gem = build_gem(tmp_path / "ok-2.0.gem", metadata=spec_for("ok", "2.0"))

    engine = GemParseEngine(recorder)
    status = engine.parse([str(tmp_path / "nope"), str(gem)])

    assert status == 1
    assert ("name", "ok") in recorder.attributes()
    assert recorder.kinds()[1] == "error"
    assert engine.generate_summary()["failed"] == 1


def test_directory_without_gems(tmp_path, recorder):
    (tmp_path / "README").write_text("nothing here")
    status = GemParseEngine(recorder).parse([str(tmp_path)])

    assert status == 1
    assert recorder.kinds() == ["parse_start", "error", "parse_end"]


def test_nested_directories_are_not_searched(tmp_path, recorder):
    nested = tmp_path / "sub"
    nested.mkdir()
    build_gem(nested / "deep-1.0.gem", metadata=spec_for("deep", "1.0"))
    build_gem(tmp_path / "top-1.0.gem", metadata=spec_for("top", "1.0"))

    GemParseEngine(recorder).parse([str(tmp_path)])
    names = [value for key, value in recorder.attributes() if key == "name"]
    assert names == ["top"]


def test_missing_metadata_entry_fails_archive(tmp_path, recorder):
    gem = build_gem(tmp_path / "empty-1.0.gem")
    status = GemParseEngine(recorder).parse([str(gem)])

    assert status == 1
    assert recorder.kinds()[:2] == ["parse_start", "gem_start"]
    assert "gem_end" in recorder.kinds()
    assert any("metadata.gz" in e[1] for e in recorder.of_kind("error"))


def test_corrupt_metadata_stream_fails_archive(tmp_path, recorder):
    broken = gzip.compress(TROLLOP_SPEC.encode("utf-8"))[:40]
    gem = build_gem(tmp_path / "broken-1.0.gem", metadata_gz=broken)

    assert GemParseEngine(recorder).parse([str(gem)]) == 1
    assert recorder.attributes() == []


def test_root_not_a_mapping_fails_archive(tmp_path, recorder):
    gem = build_gem(tmp_path / "list-1.0.gem", metadata="- one\n- two\n")
    assert GemParseEngine(recorder).parse([str(gem)]) == 1
    assert any("not a mapping" in e[1] for e in recorder.of_kind("error"))


def test_bad_dependency_does_not_fail_archive(tmp_path, recorder):
    spec = spec_for("loose", "1.0") + "dependencies:\n- name: broken\n"
    gem = build_gem(tmp_path / "loose-1.0.gem", metadata=spec)

    assert GemParseEngine(recorder).parse([str(gem)]) == 0
    assert len(recorder.of_kind("error")) == 1


def test_metadata_ceiling_from_config(trollop_gem, recorder):
    config = ParserConfig(max_metadata_size=64)
    assert GemParseEngine(recorder, config).parse([str(trollop_gem)]) == 1
    assert any("limit" in e[1] for e in recorder.of_kind("error"))


def test_collector_builds_records(trollop_gem):
    collector = RecordCollector()
    GemParseEngine(collector).parse([str(trollop_gem)])

    record, = collector.records
    assert record.package_name == "rubygem-trollop"
    assert record.version == "1.16.2"
    assert record.homepage == "http://trollop.rubyforge.org"
    assert [str(c) for c in record.constraints] == [
        "rubygem-log4r >= 1.0.5",
        "rubygem-log4r < 1.1",
        "rubygem-rake >= 0.8",
    ]
    assert record.to_dict()["requires"][1] == "rubygem-log4r < 1.1"


def test_deeply_nested_metadata_does_not_stop_the_run(tmp_path, recorder):
    deep = "name: deep\nk: " + "[" * 3000 + "]" * 3000 + "\n"
    build_gem(tmp_path / "a-deep-1.0.gem", metadata=deep)
    build_gem(tmp_path / "b-ok-1.0.gem", metadata=spec_for("ok", "1.0"))

    status = GemParseEngine(recorder).parse([str(tmp_path)])

    assert status == 1
    errors = recorder.of_kind("error")
    assert len(errors) == 1
    assert "a-deep-1.0.gem" in errors[0][1]
    assert "nesting too deep" in errors[0][1]
    assert ("name", "ok") in recorder.attributes()
    assert recorder.kinds()[-1] == "parse_end"


def test_failed_single_file_is_reported_once(tmp_path, recorder):
    gem = tmp_path / "junk-1.0.gem"
    gem.write_bytes(b"not an archive")

    assert GemParseEngine(recorder).parse([str(gem)]) == 1
    assert recorder.kinds() == ["parse_start", "gem_start", "error", "gem_end", "parse_end"]
