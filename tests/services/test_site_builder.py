import json

import pytest

from app.errors import ContentTransportError
from app.schemas.blog import PostDetail, PostSummary
from app.services.site_builder import SiteBuilder
from tests.conftest import FakeProvider


def make_provider(**overrides):
    posts = [
        PostSummary(slug="dec", title="December", date="2024-12-31", categories=["ml"]),
        PostSummary(
            slug="jan", title="January", date="2024-01-01", categories=["ml", "web"]
        ),
    ]
    details = {
        "dec": PostDetail(**posts[0].model_dump(), content="**Dec**"),
        "jan": PostDetail(
            **posts[1].model_dump(), content="<p>Jan</p>", contentFormat="html"
        ),
    }
    details.update(overrides)
    return FakeProvider(posts=posts, details=details)


def read(path):
    return json.loads(path.read_text(encoding="utf-8"))


def test_build_writes_home_category_and_post_pages(tmp_path):
    report = SiteBuilder(make_provider(), tmp_path).build()

    home = read(tmp_path / "index.json")
    assert [p["slug"] for p in home["posts"]] == ["dec", "jan"]
    assert home["categories"] == ["ml", "web"]

    assert read(tmp_path / "categories" / "index.json") == ["ml", "web"]
    web = read(tmp_path / "category" / "web.json")
    assert web["category"] == "web"
    assert [p["slug"] for p in web["posts"]] == ["jan"]

    dec = read(tmp_path / "posts" / "dec.json")
    assert dec["post"]["title"] == "December"
    assert dec["contentHtml"] == "<p><strong>Dec</strong></p>"
    assert "content" not in dec["post"]
    assert read(tmp_path / "posts" / "jan.json")["contentHtml"] == "<p>Jan</p>"

    assert report.posts == ["dec", "jan"]
    assert report.categories == ["ml", "web"]
    assert report.skipped == []


def test_build_skips_posts_that_are_not_found(tmp_path):
    provider = make_provider(jan=None)

    report = SiteBuilder(provider, tmp_path).build()

    assert report.skipped == ["jan"]
    assert not (tmp_path / "posts" / "jan.json").exists()
    assert (tmp_path / "posts" / "dec.json").exists()


def test_build_aborts_on_transport_error(tmp_path):
    provider = make_provider(dec=ContentTransportError("boom", status_code=502))

    with pytest.raises(ContentTransportError):
        SiteBuilder(provider, tmp_path).build()


def test_build_aborts_when_listing_fails(tmp_path):
    provider = FakeProvider(list_error=ContentTransportError("down"))

    with pytest.raises(ContentTransportError):
        SiteBuilder(provider, tmp_path).build()

    assert not (tmp_path / "index.json").exists()


def test_category_named_index_does_not_replace_category_list(tmp_path):
    provider = FakeProvider(
        posts=[PostSummary(slug="a", title="A", categories=["index", "web"])],
        details={"a": PostDetail(slug="a", title="A", categories=["index", "web"])},
    )

    report = SiteBuilder(provider, tmp_path).build()

    assert read(tmp_path / "categories" / "index.json") == ["index", "web"]
    index_page = read(tmp_path / "category" / "index.json")
    assert index_page["category"] == "index"
    assert [p["slug"] for p in index_page["posts"]] == ["a"]
    assert report.categories == ["index", "web"]


@pytest.mark.parametrize("slug", ["../../escaped", "nested/slug", ".hidden"])
def test_unsafe_post_slugs_are_rejected(tmp_path, slug):
    output_dir = tmp_path / "build"
    provider = FakeProvider(
        posts=[PostSummary(slug=slug, title="Bad"), PostSummary(slug="ok", title="Ok")],
        details={
            slug: PostDetail(slug=slug, title="Bad"),
            "ok": PostDetail(slug="ok", title="Ok"),
        },
    )

    report = SiteBuilder(provider, output_dir).build()

    assert report.rejected == [slug]
    assert report.posts == ["ok"]
    assert not (tmp_path / "escaped.json").exists()
    written = [p.relative_to(output_dir).as_posix() for p in output_dir.rglob("*.json")]
    assert sorted(written) == ["categories/index.json", "index.json", "posts/ok.json"]
    assert f"get_post({slug})" not in provider.calls


def test_unsafe_category_slugs_are_rejected(tmp_path):
    provider = FakeProvider(
        posts=[PostSummary(slug="a", title="A", categories=["c/c++", "web"])],
        details={"a": PostDetail(slug="a", title="A")},
    )

    report = SiteBuilder(provider, tmp_path).build()

    assert report.rejected == ["c/c++"]
    assert report.categories == ["web"]
    assert not (tmp_path / "category" / "c").exists()
    assert (tmp_path / "category" / "web.json").exists()


def test_target_refuses_paths_outside_output_dir(tmp_path):
    builder = SiteBuilder(FakeProvider(), tmp_path / "build")

    with pytest.raises(ValueError):
        builder._target("../outside.json")
