"""Shared fixtures for the dify_dsl test-suite."""

import pytest

from dify_dsl.nodes import registry

MINIMAL_YAML = """
app:
  name: M
  mode: workflow
kind: app
version: 0.2.0
workflow:
  graph:
    nodes: []
    edges: []
"""

# Written in the exact shape DifyGenerator emits, so it survives a
# parse/emit cycle unchanged at the tree level.
FULL_YAML = """
app:
  name: Doc QA
  description: Answers questions about a pasted document
  icon: 📚
  icon_background: '#E0F2FE'
  mode: workflow
  use_icon_as_answer_icon: false
kind: app
version: 0.3.0
workflow:
  graph:
    nodes:
    - id: start
      type: custom
      position: {x: 80, y: 282}
      data:
        type: start
        title: 开始
        desc: ''
        selected: false
        variables:
        - variable: document
          label: Document
          type: paragraph
          required: true
          max_length: 4000
        - variable: tone
          label: Tone
          type: select
          required: false
          default: neutral
          options: [neutral, friendly]
      positionAbsolute: {x: 80, y: 282}
      width: 244
      height: 116
    - id: summarize
      type: custom
      position: {x: 380, y: 282}
      data:
        type: llm
        title: Summarize
        desc: Condense the document
        selected: false
        model:
          provider: langgenius/openai/openai
          name: gpt-4o-mini
          mode: chat
          completion_params:
            temperature: 0.2
        prompt_template:
        - role: system
          text: |
            You are a careful summarizer.
            Answer in a {{#start.tone#}} tone.
        - role: user
          text: '{{#start.document#}}'
        context:
          enabled: false
          variable_selector: []
        vision:
          enabled: false
        structured_output_enabled: true
        output_schema:
          type: object
          properties:
            summary:
              type: string
    - id: lookup
      type: custom
      position: {x: 680, y: 282}
      data:
        type: tool
        title: Search
        desc: ''
        selected: false
        provider_id: tavily
        provider_name: tavily
        provider_type: builtin
        tool_name: tavily_search
        tool_label: Tavily Search
        tool_parameters:
          query:
            type: mixed
            value: '{{#summarize.text#}}'
        paramSchemas:
        - name: query
          type: string
          required: true
        tool_configurations:
          max_results: 5
        is_team_authorization: true
        retry_config:
          retry_enabled: true
          max_retries: 3
          retry_interval: 1000
    - id: format
      type: custom
      position: {x: 980, y: 282}
      data:
        type: code
        title: 代码执行
        desc: ''
        selected: false
        code_language: python3
        code: |
          def main(summary: str) -> dict:
              return {"result": summary.strip()}
        variables:
        - variable: summary
          value_selector: [summarize, text]
        outputs:
          result:
            type: string
            children: null
    - id: end
      type: custom
      position: {x: 1280, y: 282}
      data:
        type: end
        title: 结束
        desc: ''
        selected: false
        outputs:
        - variable: result
          value_selector: [format, result]
      zIndex: 1001
      targetPosition: top
    edges:
    - id: start-source-summarize-target
      type: custom
      source: start
      target: summarize
      selected: false
      sourceHandle: source
      targetHandle: target
      data:
        sourceType: start
        targetType: llm
        isInIteration: false
    - id: summarize-lookup
      type: custom
      source: summarize
      target: lookup
      selected: false
    - id: lookup-format
      type: custom
      source: lookup
      target: format
      selected: false
    - id: format-end
      type: custom
      source: format
      target: end
      selected: false
      zIndex: 1
  environment_variables:
  - variable: tavily_key
    label: tavily_key
    type: secret
    required: false
  features:
    file_upload:
      enabled: false
    opening_statement: ''
dependencies:
- type: marketplace
  current_identifier: null
  value:
    marketplace_plugin_unique_identifier: langgenius/openai:0.0.7
"""


@pytest.fixture
def minimal_yaml():
    return MINIMAL_YAML


@pytest.fixture
def full_yaml():
    return FULL_YAML


@pytest.fixture
def minimal_tree():
    """A fresh dict per test, safe to mutate."""
    return {
        "app": {"name": "M", "mode": "workflow"},
        "kind": "app",
        "version": "0.2.0",
        "workflow": {"graph": {"nodes": [], "edges": []}},
    }


@pytest.fixture
def clean_registry():
    """Restore the built-in node types after a test registers its own."""
    saved = dict(registry._NODE_TYPES)
    yield registry
    registry._NODE_TYPES.clear()
    registry._NODE_TYPES.update(saved)
