"""Pytest fixtures for markdown tests."""

import pytest

from src.markdown import parse


@pytest.fixture
def api_doc() -> str:
    """A class reference document using every construct of the grammar."""
    return """# class: Page

Page provides methods to interact with a single tab
in a browser.

> **NOTE** Quoted note.
> Second quote line.

## async method: Page.goto
- returns: <Promise<Response>> Resolves to the main resource response.

Navigates to a url.

### param: Page.goto.url
- `url` <string> URL to navigate page to.

### option: Page.goto.timeout
- `timeout` <number> Maximum operation time
  in milliseconds.
  * `0` disables the timeout
  * defaults to 30 seconds

```js
await page.goto('https://example.com');

await page.close();
```

<!-- GEN:toc -->
- [Page](#page)

  - [goto](#goto)
<!-- GEN:stop -->

1. First step
1. Second step
"""


@pytest.fixture
def params_doc() -> str:
    """A params document with a fan-out list and its templates."""
    return """## goto-options-list
- %%-goto-timeout-%%
- %%-goto-referer-%%

## goto-timeout
- `timeout` <number> Maximum operation time in milliseconds.
  - defaults to 30 seconds

## goto-referer
- `referer` <string> Referer header value.

## shared-headers
- `headers` <Object<string, string>> Extra HTTP headers.
"""


@pytest.fixture
def params(params_doc: str) -> list:
    """Parsed template entries."""
    return parse(params_doc)
