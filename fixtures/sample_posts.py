"""
Sample post sources for tests.
Front matter follows the content/blog convention.
"""

SELECTORS_POST = """---
title: Redux selectors, a primer
date: "2019-03-10T12:00:00.000Z"
description: Why every read from the store should go through a selector.
---

A selector is a function that takes the state and returns derived data.

## Keep the state shape private

Read it through [reselect](https://github.com/reduxjs/reselect), not
[the about page](https://erock.io/about/).

![diagram](./diagram.png)
"""

SAGA_POST = """---
title: Redux saga style guide
date: 2019-09-22
description: Conventions for sagas that are easy to test.
---

Sagas are generators that describe side effects.

## Effects are data

"Never" call an API directly -- yield `call` instead.
"""

NO_DESCRIPTION_POST = """---
title: Scaling js codebases
date: "2020-06-01T08:30:00+02:00"
---

Code organization decides how fast a team can move once the application is
bigger than anyone can hold in their head. Group the reducer, selectors, sagas
and components of a feature in a single package.
"""


def sample_posts() -> dict[str, str]:
    """Map of relative path → file contents."""
    return {
        "redux-selectors/index.md": SELECTORS_POST,
        "redux-saga-style-guide/index.md": SAGA_POST,
        "scaling-js-codebases.md": NO_DESCRIPTION_POST,
    }
