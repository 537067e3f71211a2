from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from crawl_profiler import CrawlResult, ResultWriteError, exporters


@pytest.fixture()
def crawl_result() -> CrawlResult:
    return CrawlResult(
        word_counts={"profiler": 4, "crawler": 2},
        urls_visited={"https://example.com/b", "https://example.com/a"},
    )


def test_to_dict_uses_wire_field_names(crawl_result: CrawlResult) -> None:
    assert crawl_result.to_dict() == {
        "wordCounts": {"profiler": 4, "crawler": 2},
        "urlsVisited": ["https://example.com/a", "https://example.com/b"],
    }


def test_result_is_immutable(crawl_result: CrawlResult) -> None:
    with pytest.raises(TypeError):
        crawl_result.word_counts["new"] = 1  # type: ignore[index]
    assert isinstance(crawl_result.urls_visited, frozenset)


def test_write_to_sink_leaves_it_open(crawl_result: CrawlResult) -> None:
    sink = io.StringIO()
    exporters.CrawlResultWriter(crawl_result).write(sink)
    assert not sink.closed
    assert json.loads(sink.getvalue()) == crawl_result.to_dict()


def test_write_to_new_path(crawl_result: CrawlResult, tmp_path: Path) -> None:
    output = tmp_path / "out" / "crawl.json"
    exporters.CrawlResultWriter(crawl_result, pretty_print=True).write(output)
    content = output.read_text(encoding="utf-8")
    assert json.loads(content) == crawl_result.to_dict()
    assert '\n  "wordCounts"' in content


def test_write_to_existing_path_appends(crawl_result: CrawlResult, tmp_path: Path) -> None:
    output = tmp_path / "crawl.json"
    output.write_text("existing\n", encoding="utf-8")

    writer = exporters.CrawlResultWriter(crawl_result)
    writer.write(output)
    writer.write(str(output))

    content = output.read_text(encoding="utf-8")
    document = json.dumps(crawl_result.to_dict(), ensure_ascii=False)
    # two concatenated documents, not one valid JSON value
    assert content == "existing\n" + document + document


def test_export_crawl_result_returns_resolved_path(crawl_result: CrawlResult, tmp_path: Path) -> None:
    path = exporters.export_crawl_result(tmp_path / "result.json", crawl_result)
    assert path.is_absolute()
    assert json.loads(path.read_text(encoding="utf-8"))["wordCounts"]["profiler"] == 4


def test_write_failure_raises_result_write_error(crawl_result: CrawlResult, tmp_path: Path) -> None:
    class BrokenSink:
        def write(self, text: str) -> int:
            raise OSError("broken pipe")

    writer = exporters.CrawlResultWriter(crawl_result)
    with pytest.raises(ResultWriteError) as exc_info:
        writer.write(BrokenSink())
    assert isinstance(exc_info.value.__cause__, OSError)

    with pytest.raises(ResultWriteError):
        writer.write(tmp_path)


def test_writer_requires_result() -> None:
    with pytest.raises(TypeError):
        exporters.CrawlResultWriter(None)  # type: ignore[arg-type]


def test_export_crawl_result_wraps_directory_errors(crawl_result: CrawlResult, tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("not a directory", encoding="utf-8")

    with pytest.raises(ResultWriteError) as exc_info:
        exporters.export_crawl_result(blocker / "out.json", crawl_result)
    assert isinstance(exc_info.value.__cause__, OSError)


def test_result_is_hashable(crawl_result: CrawlResult) -> None:
    same = CrawlResult(word_counts={"profiler": 4, "crawler": 2}, urls_visited=crawl_result.urls_visited)
    assert crawl_result == same
    assert hash(crawl_result) == hash(same)
    assert len({crawl_result, same}) == 1
