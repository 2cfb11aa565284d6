import pytest

from inkpress import post_helpers as ph
from inkpress.blog_helpers import FALSE, TRUE
from inkpress.engine import RenderError, Renderer
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


@pytest.fixture
def renderer():
    return Renderer({})


def make_values(context=HelperContext.POST, **kwargs):
    author = User(id=1, name="Ann <A>", slug="ann", email="ann@example.com",
                  bio="bio", website="site", location="here", image="a.png", cover="c.png")
    posts = [
        Post(id=7, title="First", slug="first", html="<p>one two three</p>",
             tags=[Tag(name="Go", slug="go"), Tag(name="Py", slug="py")],
             author=author, image="p.png", is_featured=True),
        Post(id=8, title="Second", slug="second", html="<p>x</p>", author=author),
    ]
    values = RequestData(posts=posts, blog=Blog(url="http://blog.example.com"), **kwargs)
    values.current_helper_context = context
    return values


def args(*names):
    return [Helper(name=n) for n in names]


def test_strip_tags_removes_markup():
    assert ph.strip_tags("<p>Hello <b>world</b></p>") == "Hello world"


def test_title_escaped_and_unescaped(renderer):
    values = make_values()
    values.posts[0].title = "<b>"
    assert ph.title_helper(renderer, Helper(name="title"), values) == "&lt;b&gt;"
    assert ph.title_helper(renderer, Helper(name="title", unescaped=True), values) == "<b>"


def test_content_is_raw_html(renderer):
    values = make_values()
    assert ph.content_helper(renderer, Helper(), values) == "<p>one two three</p>"


def test_excerpt_words_and_characters(renderer):
    values = make_values()
    assert ph.excerpt_helper(renderer, Helper(arguments=args("words=2")), values) == "one two"
    assert ph.excerpt_helper(renderer, Helper(arguments=args("characters=3")), values) == "one"
    full = ph.excerpt_helper(renderer, Helper(), values)
    assert full == "one two three"


def test_excerpt_outside_post_context_is_empty(renderer):
    values = make_values(context=HelperContext.INDEX)
    assert ph.excerpt_helper(renderer, Helper(), values) == FALSE


def test_post_class(renderer):
    values = make_values()
    values.posts[0].is_page = True
    result = ph.post_class_helper(renderer, Helper(), values)
    assert result == "post featured page tag-go tag-py"


def test_featured_and_posts(renderer):
    values = make_values()
    assert ph.featured_helper(renderer, Helper(), values) == TRUE
    values.current_post_index = 1
    assert ph.featured_helper(renderer, Helper(), values) == FALSE
    assert ph.posts_helper(renderer, Helper(), values) == TRUE
    assert ph.posts_helper(renderer, Helper(), RequestData()) == FALSE


def test_id_helper(renderer):
    assert ph.id_helper(renderer, Helper(), make_values()) == "7"


def test_tags_with_links(renderer):
    result = ph.tags_helper(renderer, Helper(), make_values())
    assert result == '<a href="/tag/go/">Go</a>, <a href="/tag/py/">Py</a>'


def test_tags_without_links_and_options(renderer):
    helper = Helper(arguments=args("autolink=false", "separator=|", "prefix=In", "suffix=end"))
    assert ph.tags_helper(renderer, helper, make_values()) == "In Go|Py end"


def test_tags_empty_for_untagged_post(renderer):
    values = make_values()
    values.current_post_index = 1
    assert ph.tags_helper(renderer, Helper(), values) == FALSE


def test_tag_name_prefers_current_tag(renderer):
    values = make_values(current_tag=Tag(name="Rust", slug="rust"))
    assert ph.tag_name_helper(renderer, Helper(), values) == "Rust"
    assert ph.tag_slug_helper(renderer, Helper(), values) == "rust"
    values.current_tag = None
    values.current_tag_index = 1
    assert ph.tag_name_helper(renderer, Helper(), values) == "Py"
    assert ph.tag_slug_helper(renderer, Helper(), values) == "py"


def test_author_link_and_plain(renderer):
    values = make_values()
    assert ph.author_helper(renderer, Helper(), values) == '<a href="/author/ann/">Ann &lt;A&gt;</a>'
    plain = ph.author_helper(renderer, Helper(arguments=args("autolink=false")), values)
    assert plain == "Ann &lt;A&gt;"


def test_author_block_executes_in_author_context(renderer):
    values = make_values()
    child = Helper(name="image", position=0, function=ph.image_helper)
    block = Helper(name="author", block="!", children=[child])
    assert ph.author_helper(renderer, block, values) == "a.png!"
    assert values.current_helper_context == HelperContext.POST


def test_author_fields(renderer):
    values = make_values()
    h = Helper()
    assert ph.author_name_helper(renderer, h, values) == "Ann &lt;A&gt;"
    assert ph.email_helper(renderer, h, values) == "ann@example.com"
    assert ph.bio_helper(renderer, h, values) == "bio"
    assert ph.website_helper(renderer, h, values) == "site"
    assert ph.location_helper(renderer, h, values) == "here"
    assert ph.cover_helper(renderer, h, values) == "c.png"
    assert ph.author_image_helper(renderer, h, values) == "a.png"


def test_missing_author_raises(renderer):
    values = make_values()
    values.posts[0].author = None
    with pytest.raises(RenderError):
        ph.bio_helper(renderer, Helper(), values)


def test_image_depends_on_context(renderer):
    values = make_values()
    assert ph.image_helper(renderer, Helper(), values) == "p.png"
    values.current_helper_context = HelperContext.AUTHOR
    assert ph.image_helper(renderer, Helper(), values) == "a.png"
    values.current_helper_context = HelperContext.INDEX
    assert ph.image_helper(renderer, Helper(), values) == FALSE


@pytest.mark.parametrize("index,first,last,even,odd", [
    (0, TRUE, FALSE, FALSE, TRUE),
    (1, FALSE, TRUE, TRUE, FALSE),
])
def test_loop_position_for_posts(renderer, index, first, last, even, odd):
    values = make_values(current_post_index=index)
    assert ph.at_first_helper(renderer, Helper(), values) == first
    assert ph.at_last_helper(renderer, Helper(), values) == last
    assert ph.at_even_helper(renderer, Helper(), values) == even
    assert ph.at_odd_helper(renderer, Helper(), values) == odd


def test_loop_position_for_tags(renderer):
    values = make_values(context=HelperContext.TAG, current_tag_index=1)
    assert ph.at_last_helper(renderer, Helper(), values) == TRUE
    assert ph.at_first_helper(renderer, Helper(), values) == FALSE


def test_name_in_tag_and_author_scope(renderer):
    values = make_values(context=HelperContext.TAG)
    assert ph.name_helper(renderer, Helper(), values) == "Go"
    values.current_helper_context = HelperContext.AUTHOR
    assert ph.name_helper(renderer, Helper(unescaped=True), values) == "Ann <A>"


def test_url_post_and_absolute(renderer):
    values = make_values()
    assert ph.url_helper(renderer, Helper(), values) == "/first/"
    absolute = ph.url_helper(renderer, Helper(arguments=args("absolute=true")), values)
    assert absolute == "http://blog.example.com/first/"


def test_url_author(renderer):
    values = make_values(context=HelperContext.AUTHOR)
    assert ph.url_helper(renderer, Helper(), values) == "/author/ann/"


def test_url_navigation_keeps_external_links(renderer):
    values = make_values(context=HelperContext.NAVIGATION)
    values.blog.navigation_items = [Navigation(label="A", url="/about/"),
                                    Navigation(label="B", url="https://other.example.com/")]
    helper = Helper(arguments=args("absolute=true"))
    assert ph.url_helper(renderer, helper, values) == "http://blog.example.com/about/"
    values.current_navigation_index = 1
    assert ph.url_helper(renderer, helper, values) == "https://other.example.com/"


def test_post_helper_switches_context(renderer):
    values = make_values(context=HelperContext.INDEX)
    child = Helper(name="url", position=0, function=ph.url_helper)
    assert ph.post_helper(renderer, Helper(name="post", children=[child]), values) == "/first/"
    assert values.current_helper_context == HelperContext.INDEX