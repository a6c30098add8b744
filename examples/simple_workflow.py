""" Example: build a small summarizer workflow and write it to a Dify DSL file. """
from pathlib import Path

from dify_dsl.builder.workflow_builder import WorkflowBuilder
from dify_dsl.generator.dify_generator import DifyGenerator
from dify_dsl.parser.dify_parser import DifyParser


def configure_llm(node):
    node.set_model("gpt-4o-mini", "langgenius/openai/openai")
    node.set_system_prompt("You summarize documents in three sentences.")
    node.set_user_prompt("{{#start.document#}}")


def main():
    app = (
        WorkflowBuilder()
        .set_name("Document Summarizer")
        .set_description("Summarize a pasted document")
        .add_environment_variable("api_base", default="https://example.invalid")
        .add_start_node(lambda node: node.add_input("document", "paragraph", required=True))
        .add_llm_node("summarize", configure_llm)
        .add_end_node(lambda node: node.add_output("summary", ["summarize", "text"]))
        .build()
    )

    errors = app.workflow.graph.validate()
    if errors:
        raise SystemExit("\n".join(errors))

    out_path = Path("build/document_summarizer.yml")
    DifyGenerator().generate_to_file(app, out_path, pretty=True)
    print(f"Wrote Dify DSL to: {out_path}")

    reloaded = DifyParser().parse_file(out_path)
    print(f"Reloaded {reloaded.name!r}: {len(reloaded.workflow.graph.nodes)} nodes, "
          f"{len(reloaded.workflow.graph.edges)} edges")


if __name__ == '__main__':
    main()
