from inkpress.models import (
    Blog,
    Helper,
    HelperContext,
    Navigation,
    Post,
    RequestData,
    Tag,
    User,
)


def test_helper_context_numbering_matches_template_ids():
    assert [c.value for c in HelperContext] == [0, 1, 2, 3, 4]
    assert HelperContext(1) is HelperContext.POST


def test_blog_defaults_asset_path():
    assert Blog().asset_path == "/assets/"


def test_blog_lock_is_reentrant():
    blog = Blog(title="T")
    with blog.lock:
        with blog.lock:
            blog.post_count = 3
    assert blog.post_count == 3


def test_blog_equality_ignores_lock():
    first = Blog(title="a", post_count=2)
    second = Blog(title="a", post_count=2)
    with first.lock:
        equal_while_locked = first == second
    assert equal_while_locked is True
    assert (first == Blog(title="b", post_count=2)) is False


def test_request_data_defaults():
    data = RequestData()
    assert data.current_helper_context == HelperContext.INDEX
    assert data.current_template == HelperContext.INDEX
    assert data.posts == []
    assert data.current_tag is None


def test_request_data_lists_not_shared():
    first = RequestData()
    second = RequestData()
    first.content_for_helpers.append(Helper(name="contentFor"))
    assert second.content_for_helpers == []


def test_post_tags_and_author():
    author = User(id=7, name="Ann", email="ann@example.com")
    post = Post(title="Hi", tags=[Tag(name="go", slug="go")], author=author)
    assert post.author.id == 7
    assert [t.slug for t in post.tags] == ["go"]
    assert Post().tags is not post.tags


def test_helper_children_and_arguments_independent():
    a = Helper(name="if")
    b = Helper(name="if")
    a.arguments.append(Helper(name="posts"))
    assert b.arguments == []
    assert a.function is None


def test_navigation_fields():
    nav = Navigation(label="Home", url="/")
    assert (nav.label, nav.url, nav.slug) == ("Home", "/", "")