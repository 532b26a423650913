from codegen_state.migration.fields import (
    backfill_project_name,
    reconcile_fields,
    strip_inference_secrets,
)


def test_user_api_keys_are_stripped():
    context = {"agentId": "a-1", "userApiKeys": {"openai": "sk-secret"}, "modelConfigs": {"x": 1}}

    result = strip_inference_secrets({"inferenceContext": context})

    assert result.changed is True
    assert result.value == {"agentId": "a-1", "modelConfigs": {"x": 1}}
    assert "userApiKeys" in context


def test_clean_inference_context_keeps_reference():
    context = {"agentId": "a-1"}

    result = strip_inference_secrets({"inferenceContext": context})

    assert result.changed is False
    assert result.value is context


def test_missing_inference_context_is_ignored():
    result = strip_inference_secrets({})

    assert result.value is None
    assert result.changed is False


def test_template_details_override_template_name():
    state = {
        "templateDetails": {"name": "saas-kit", "files": []},
        "templateName": "old-name",
        "projectUpdatesAccumulator": [],
    }

    result = reconcile_fields(state)

    assert result.changed is True
    assert result.value.template_name == "saas-kit"
    assert result.value.dropped_keys == ("templateDetails",)


def test_screenshot_and_missing_accumulator_force_migration():
    screenshot = reconcile_fields({"latestScreenshot": "data:image/png", "projectUpdatesAccumulator": []})
    missing = reconcile_fields({"templateName": "blog-starter"})

    assert screenshot.changed is True
    assert screenshot.value.dropped_keys == ("latestScreenshot",)
    assert missing.changed is True
    assert missing.value.missing_accumulator is True
    assert missing.value.dropped_keys == ()


def test_current_fields_need_no_reconciliation(current_state):
    result = reconcile_fields(current_state)

    assert result.changed is False
    assert result.value.template_name == "blog-starter"


def test_project_name_backfilled_from_template_name():
    state = {"projectName": "", "templateName": "blog-starter"}

    result = backfill_project_name(state, "blog-starter", id_generator=lambda: "Ab12cd34")

    assert result.changed is True
    assert result.value == "blog-starter-ab12"
    assert len(result.value) <= 20


def test_project_name_backfilled_with_generated_token():
    result = backfill_project_name({"projectName": ""}, "blog-starter")

    assert result.value.startswith("blog-starter")
    assert 0 < len(result.value) <= 20


def test_blueprint_name_takes_priority():
    state = {"blueprint": {"projectName": "Todo Tracker"}, "query": "make a todo app"}

    result = backfill_project_name(state, "react-vite", id_generator=lambda: "zzzz")

    assert result.value == "todo-tracker-zzzz"


def test_query_is_last_naming_fallback():
    state = {"query": "A weather dashboard for hikers"}

    seeds = []

    def fake_name_generator(seed, token, max_length):
        seeds.append((seed, token, max_length))
        return "weather"

    result = backfill_project_name(
        state, None, id_generator=lambda: "tok", name_generator=fake_name_generator
    )

    assert result.value == "weather"
    assert seeds == [("A weather dashboard for hikers", "tok", 20)]


def test_existing_project_name_is_kept():
    result = backfill_project_name({"projectName": "keep-me"}, "blog-starter")

    assert result.value == "keep-me"
    assert result.changed is False
