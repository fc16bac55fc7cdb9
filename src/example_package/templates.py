"""Static file contents for the tutorial project layout.

Placeholders use :class:`string.Template` syntax (``$name``) because the
TOML inline tables in ``pyproject.toml`` already use braces.
"""
from __future__ import annotations

from string import Template


PYPROJECT_TOML = Template('''\
[build-system]
requires = ["hatchling >= 1.26"]
build-backend = "hatchling.build"

[project]
name = "$dist_name"
version = "$version"
authors = [
  { name="$author_name", email="$author_email" },
]
description = "$description"
readme = "README.md"
requires-python = "$requires_python"
classifiers = [
    "Programming Language :: Python :: 3",
    "Operating System :: OS Independent",
]
license = "$license"
license-files = ["LICEN[CS]E*"]

[project.urls]
Homepage = "$homepage"
Issues = "$issues"
''')


README_MD = Template('''\
# $title

This is a simple example package. You can use
[GitHub-flavored Markdown](https://guides.github.com/features/mastering-markdown/)
to write your content.
''')


MIT_LICENSE = Template('''\
Copyright (c) $year $author_name

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.
''')


EXAMPLE_MODULE = '''\
def add_one(number):
    return number + 1
'''

PACKAGE_INIT = ""
