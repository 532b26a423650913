import copy

import pytest


def make_message(index, *, role="user", content=None, token="auto"):
    message = {"role": role, "content": content if content is not None else f"message {index}"}
    if token == "auto":
        message["conversationId"] = f"conv-{index}"
    elif token is not None:
        message["conversationId"] = token
    return message


def make_memo(index):
    return make_message(index, role="assistant", content=f"**<Internal Memo>** phase {index} notes")


@pytest.fixture
def current_state():
    return copy.deepcopy(
        {
            "query": "Build me a blog",
            "templateName": "blog-starter",
            "projectName": "blog-starter-x1y2",
            "generatedFilesMap": {
                "src/index.ts": {
                    "filePath": "src/index.ts",
                    "fileContents": "export {}",
                    "filePurpose": "entry point",
                    "lastDiff": "",
                }
            },
            "conversationMessages": [make_message(1), make_message(2, role="assistant")],
            "inferenceContext": {"agentId": "agent-1"},
            "projectUpdatesAccumulator": [],
            "blueprint": {"title": "Blog"},
        }
    )


@pytest.fixture
def message_factory():
    return make_message


@pytest.fixture
def memo_factory():
    return make_memo
