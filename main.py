"""Example usage of flowplot."""

import logging
from pathlib import Path

from flowplot import (
    DiagramRenderer,
    Workflow,
    render_to_svg,
    save_image,
    step,
    workflow,
)

OUTPUT = Path("output")


def onboarding_example():
    """Create a short user journey with the DSL."""
    with workflow("user_journey", filename="output/onboarding") as wf:
        start = step("start", "User lands on the signup page")
        form = step("process", "Fill in account details")
        verify = step("decision", "Email verified?")
        resend = step("process", "Resend verification email")
        done = step("end", "Account ready")

        start >> form >> verify >> done
        verify >> resend >> verify

    print(f"Onboarding diagram saved ({len(wf.workflow)} steps)")


def backend_payload_example():
    """Render a payload as returned by the analysis backend, over two rows."""
    payload = {
        "workflow_type": "service_blueprint",
        "timestamp": "2024-05-02T14:31:07Z",
        "document_length": 5120,
        "workflow_nodes": [
            {"id": "n1", "type": "start", "label": "Customer submits claim", "connections": ["n2"]},
            {"id": "n2", "type": "process", "label": "Intake agent logs claim in CRM", "connections": ["n3"]},
            {"id": "n3", "type": "decision", "label": "Documents complete?", "connections": ["n4", "n5"]},
            {"id": "n4", "type": "process", "label": "Request missing documents", "connections": ["n3"]},
            {"id": "n5", "type": "process", "label": "Adjuster reviews evidence", "connections": ["n6"]},
            {"id": "n6", "type": "decision", "label": "Claim approved?", "connections": ["n7", "n8"]},
            {"id": "n7", "type": "process", "label": "Issue payment", "connections": ["n9"]},
            {"id": "n8", "type": "process", "label": "Send rejection letter", "connections": ["n9"]},
            {"id": "n9", "type": "end", "label": "Close claim", "connections": ["archive"]},
        ],
    }
    wf = Workflow.from_dict(payload)

    renderer = DiagramRenderer(show_legend=True)
    surface = renderer.render_surface(wf)
    for fmt in ("png", "jpeg"):
        path = save_image(surface, wf, fmt, directory=OUTPUT)
        print(f"Saved {path}")

    render_to_svg(wf, filename=str(OUTPUT / "service_blueprint"), renderer=renderer)
    print("Saved service_blueprint.svg")


def main():
    logging.basicConfig(level=logging.INFO)
    OUTPUT.mkdir(exist_ok=True)
    onboarding_example()
    backend_payload_example()


if __name__ == "__main__":
    main()
