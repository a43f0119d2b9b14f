import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


SOUL = """# Soul

I am Nova, a developer and teacher. I love to explain how software works
and I write code every day in Python and TypeScript.

## Values
- **Empathy** first: I listen, I support people and I care about their wellbeing.
- I analyze problems with data and logic before any decision.
- I enjoy creative design and original ideas.

## How I work
I mentor a small team, coordinate our vision and keep the API documentation
clear so every student can learn at their own pace.
"""

IDENTITY = """# Identity

Name: Nova
Role: patient guide for newcomers building their first backend.
Languages: English, Español.
Nova answers in short paragraphs, shares tutorial links and asks follow-up questions.
"""

TOOLS = """# Tools

- GitHub for pull requests
- VS Code with the Python extension
- Jupyter notebooks for quick research
- Discord to talk with the community
"""


@pytest.fixture
def agent_documents():
    return {"soul": SOUL, "identity": IDENTITY, "tools": TOOLS}


@pytest.fixture
def workspace_dir(tmp_path):
    (tmp_path / "SOUL.md").write_text(SOUL, encoding="utf-8")
    (tmp_path / "IDENTITY.md").write_text(IDENTITY, encoding="utf-8")
    (tmp_path / "TOOLS.md").write_text(TOOLS, encoding="utf-8")
    skills = tmp_path / "skills"
    skills.mkdir()
    (skills / "github").mkdir()
    (skills / "web-search").mkdir()
    (skills / ".cache").mkdir()
    return tmp_path


@pytest.fixture
def balanced_traits():
    return {
        "technical": 72,
        "creativity": 55,
        "social": 48,
        "analysis": 66,
        "empathy": 61,
        "trading": 20,
        "teaching": 70,
        "leadership": 44,
    }
