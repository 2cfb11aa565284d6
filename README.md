# inkpress

inkpress is the rendering core of a small blogging platform. It compiles
Ghost-style Handlebars themes (`.hbs` files) and renders blog pages from
them. It also builds URL slugs, RSS feeds and XML sitemaps. It loads a fixed
set of static files into memory, and it can reload themes when their files
change.

## Installation

```
pip install inkpress
```

To run the test suite, install the `test` extra and run `pytest`:

```
pip install "inkpress[test]"
pytest
```

## Modules

- `inkpress.models` holds the data types: `Blog`, `Post`, `Tag`, `User`,
  `Navigation`, the compiled `Helper` tree, the per-request `RequestData`,
  and the `HelperContext` enumeration (index, post, tag, author and
  navigation). A `Blog` carries a re-entrant `lock`, which the renderer
  holds while it renders.
- `inkpress.slugs.generate_slug(text, table, exists=None)` turns text into a
  URL slug of at most 75 characters. Spaces, hyphens and slashes become
  single hyphens. Letters, digits and underscores are kept, and everything
  else is dropped. `exists(table, slug)` reports slugs that are already
  taken. A numeric suffix (`-2`, `-3`, ...) makes the result unique.
  Slugs for the `"tags"` and `"navigation"` tables are never made unique.
  For `"posts"`, the reserved words `rss`, `tag`, `author`, `page` and
  `admin` always get a suffix. `unique_slug` does the suffixing on its own.
- `inkpress.arguments.process_helper_arguments` turns helper arguments such
  as `words=30` into a `{key: value}` mapping. `tags_from_comma_string`
  turns `"a, b, c"` into `Tag` objects and skips empty entries.
- `inkpress.compiler` compiles templates and themes:
  - `compile_template(data, name)` turns template text into a `Helper` tree.
  - `compile_theme(theme_path, builtin_dir)` compiles every `.hbs` file of a
    theme and returns a `{name: Helper}` dict. It requires `index` and
    `post`. It takes `pagination` and `navigation` from `builtin_dir` when
    the theme lacks them.
  - `load_theme(themes_dir, active_theme, builtin_dir)` tries the active
    theme first, then `promenade`, then every theme in the directory. It
    returns a tuple `(theme_name, templates)`.
  - `list_themes(themes_dir)` returns the sorted names of the theme
    directories.

  Failures raise `ThemeError`.
- `inkpress.engine.Renderer(templates, counter)` executes compiled
  templates. It provides `render_post`, `render_index`, `render_author` and
  `render_tag`. Each of these returns the rendered HTML as a string.
  `render_post` raises `RenderError` for unpublished posts. The author and
  tag pages fall back to the `index` template. Pagination helpers on author
  and tag pages ask the `counter` for post totals. The counter is any object
  with `posts_by_user(user_id)` and `posts_by_tag(tag_id)` methods, and
  these methods raise `LookupError` when a total is unknown.
- `inkpress.registry.resolve_helper(name)` maps a helper name such as
  `foreach`, `@blog.title` or `page_url` to its implementation. Unknown
  names get a helper that logs a warning and outputs nothing. The
  implementations live in `inkpress.blog_helpers` and
  `inkpress.post_helpers`.
- `inkpress.feed.render_rss(blog, posts, now=None)` produces an RSS 2.0
  document. Posts whose `id` is 0 are left out.
- `inkpress.sitemap.build_sitemap(base_url, posts)` produces a sitemap. It
  lists the home page, then the published posts, then the published pages.
  `sitemap_base_url(url, https_url, https_usage)` returns `url` when
  `https_usage` is `"None"`, and `https_url` otherwise.
- `inkpress.static_files.StaticFiles(directory)` loads `favicon.ico`,
  `robots.txt` and the usual icon files into memory, each with its MIME
  type. `get(path)` returns a `StaticFile`. It also reads other files inside
  the directory, and raises `FileNotFoundError` when a file is missing.
- `inkpress.watcher.ThemeWatcher(handlers)` maps file extensions (such as
  `".hbs"`) to callbacks. `watch(paths)` watches every directory below the
  given paths and replaces any earlier watches. When a file with a
  registered extension is modified, the watcher calls the callback for that
  extension. `stop()` ends watching.

## Example

```python
from inkpress.compiler import load_theme
from inkpress.engine import Renderer
from inkpress.models import Blog, Post, User


class Counter:
    def posts_by_user(self, user_id):
        return 1

    def posts_by_tag(self, tag_id):
        return 0


theme_name, templates = load_theme("content/themes", "promenade", "built-in/hbs")
renderer = Renderer(templates, Counter())

blog = Blog(url="https://blog.example.com", title="Notes", post_count=1, posts_per_page=5)
author = User(id=1, name="Alice", slug="alice")
posts = [Post(id=1, title="Hello", slug="hello", html="<p>Hi</p>", is_published=True, author=author)]

html = renderer.render_index(posts, blog, 1, "/")
```

## What inkpress does not do

inkpress renders pages from data that you pass in. It does not include:

- an HTTP server or routing;
- an admin interface or user authentication;
- a database or any other storage for posts, users and settings;
- Markdown conversion;
- image resizing;
- a plugin runtime for helpers that are defined outside the package.

The calling application supplies the posts, the blog settings and the post
totals, and sends the rendered strings to its clients.