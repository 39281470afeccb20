"""
Example of an editing session with non-destructive deletions.

Types a sentence, deletes two ranges, expands one of them, and prints the
preview, the deletion log, and the Markdown export.
"""

from collapsible_editor import (
    EditController,
    export_markdown,
    format_deletion_log,
    render_state,
    render_terminal,
)


def main():
    """Run the session."""
    controller = EditController(focus_editor=lambda: print("   (focus returned to editor)"))
    controller.text_changed("The quick brown fox jumps over the lazy dog.", caret=44)

    print("=" * 60)
    print("Collapsible editing session")
    print("=" * 60)

    print("\n1. Backspace without a selection does nothing:")
    result = controller.key_pressed("Backspace")
    print(f"   {result.delete}")

    print("\n2. Delete 'quick ' and 'lazy ':")
    first = controller.key_pressed("Backspace", 4, 10).delete
    second = controller.key_pressed("Backspace", 35, 40).delete
    print(f"   {first}")
    print(f"   {second}")
    print(f"   {render_terminal(render_state(controller.state))}")

    print("\n3. Expand the second deletion:")
    controller.toggle(second.deletion.id)
    print(f"   {render_terminal(render_state(controller.state))}")

    print("\n4. Deletion log:")
    for line in format_deletion_log(controller.state.deletions).splitlines():
        print(f"   {line}")

    print("\n5. Markdown export:")
    print(export_markdown(controller.state))


if __name__ == "__main__":
    main()
