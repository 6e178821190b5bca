"""Shared fixtures for core unit tests"""

import pytest


SAMPLE_MD = """\
---
title: My Article
subtitle: A Deep Dive
tags: [tech, tutorial]
---

## Introduction

This is the **introduction** with some *emphasis*.

- Point 1
- Point 2

### Code Example

```javascript
function example() {
  return true;
}
```

> [!tip] Remember
> Always test your code

Final paragraph with a [link](https://example.com).
"""


@pytest.fixture(name="sample_md")
def sample_md_fixture():
    return SAMPLE_MD
