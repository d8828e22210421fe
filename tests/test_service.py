import re
import pytest
from article_maker import service
from article_maker.config import Settings
from article_maker.errors import InvalidPayload, PersistenceFailure, StorageUnavailable, TemplateUnavailable
from article_maker.schemas import SaveArticleRequest
from article_maker.service import parse_request, publish_article, save_article
from article_maker.storage import write_new_file


def test_publish_writes_sanitized_document(settings):
    saved = publish_article({"htmlContent": "<p>Hi</p><script>alert(1)</script>", "articleName": "My First Post"}, settings)
    assert re.fullmatch(r"my-first-post-\d+\.html", saved.filename)
    assert saved.file_path == settings.articles_dir / saved.filename
    assert saved.public_url == f"/articles/{saved.filename}"
    text = saved.file_path.read_text(encoding="utf-8")
    assert "<p>Hi</p>" in text
    assert "<script>" not in text


def test_directory_is_created_on_demand(tmp_path):
    settings = Settings(articles_dir=tmp_path / "nested" / "articles", template_path=None)
    saved = save_article(SaveArticleRequest(htmlContent="<p>x</p>"), settings)
    assert saved.file_path.exists()
    assert re.fullmatch(r"article-\d+\.html", saved.filename)


def test_parse_request_accepts_json_bytes():
    req = parse_request(b'{"htmlContent": "<p>a</p>", "articleName": "A"}')
    assert req.htmlContent == "<p>a</p>"
    assert req.articleName == "A"


@pytest.mark.parametrize("payload", [
    b"",
    b"not json",
    b"[]",
    b'{"articleName": "no content"}',
    b'{"htmlContent": 123}',
    {"htmlContent": None},
])
def test_invalid_payloads(payload):
    with pytest.raises(InvalidPayload) as exc:
        parse_request(payload)
    assert exc.value.status_code == 400
    assert exc.value.details


def test_storage_unavailable_when_path_is_a_file(tmp_path):
    blocker = tmp_path / "articles"
    blocker.write_text("not a directory")
    settings = Settings(articles_dir=blocker, template_path=None)
    with pytest.raises(StorageUnavailable) as exc:
        save_article(SaveArticleRequest(htmlContent="<p>x</p>"), settings)
    assert exc.value.status_code == 500


def test_template_unavailable_writes_nothing(tmp_path):
    settings = Settings(articles_dir=tmp_path / "articles", template_path=tmp_path / "missing.html")
    with pytest.raises(TemplateUnavailable):
        save_article(SaveArticleRequest(htmlContent="<p>x</p>"), settings)
    assert list(settings.articles_dir.iterdir()) == []


def test_external_template_is_used(tmp_path):
    template = tmp_path / "article-template.html"
    template.write_text("<main><h1>{{ title }}</h1>{{ content }}</main>", encoding="utf-8")
    settings = Settings(articles_dir=tmp_path / "articles", template_path=template)
    saved = save_article(SaveArticleRequest(htmlContent="<p>x</p>", articleName="Hello"), settings)
    assert saved.file_path.read_text(encoding="utf-8") == "<main><h1>Hello</h1><p>x</p></main>"


def test_collision_picks_a_new_name(settings, monkeypatch):
    settings.articles_dir.mkdir(parents=True)
    (settings.articles_dir / "dup.html").write_text("existing", encoding="utf-8")
    names = iter(["dup.html", "fresh.html"])
    monkeypatch.setattr(service, "derive_filename", lambda name: next(names))

    saved = save_article(SaveArticleRequest(htmlContent="<p>x</p>"), settings)

    assert saved.filename == "fresh.html"
    assert (settings.articles_dir / "dup.html").read_text(encoding="utf-8") == "existing"


def test_persistent_collisions_fail(settings, monkeypatch):
    settings.articles_dir.mkdir(parents=True)
    (settings.articles_dir / "dup.html").write_text("existing", encoding="utf-8")
    monkeypatch.setattr(service, "derive_filename", lambda name: "dup.html")
    with pytest.raises(PersistenceFailure):
        save_article(SaveArticleRequest(htmlContent="<p>x</p>"), settings)


def test_write_error_is_persistence_failure(tmp_path):
    with pytest.raises(PersistenceFailure):
        write_new_file(tmp_path / "missing-dir" / "a.html", "x")


def test_failed_write_leaves_no_file_behind(settings):
    with pytest.raises(PersistenceFailure):
        publish_article({"htmlContent": "<p>x\ud800</p>", "articleName": "Half"}, settings)
    assert list(settings.articles_dir.iterdir()) == []


def test_empty_template_env_means_builtin_template(tmp_path, monkeypatch):
    monkeypatch.setenv("ARTICLE_TEMPLATE_PATH", "")
    settings = Settings(articles_dir=tmp_path / "articles")
    assert settings.template_path is None
    saved = save_article(SaveArticleRequest(htmlContent="<p>x</p>", articleName="Plain"), settings)
    assert "<title>Plain</title>" in saved.file_path.read_text(encoding="utf-8")
