import gradio as gr
from functools import partial

from json_arranger.config import load_config
from json_arranger.handlers import (
    DEFAULT_SORT,
    aggregate_all,
    apply_raw_edit,
    choose_sort_column,
    download_document,
    flip_sort_direction,
    initial_load,
    load_document_from_file,
    load_document_from_url,
    select_category,
    sort_by_selected_cell,
    update_search,
)
from json_arranger.logging_config import setup_logging
from json_arranger.sorting import SortSpec

config = load_config()
setup_logging(config.log_level)

# --- UI Definition ---
with gr.Blocks(title="JSON Arranger") as demo:
    gr.Markdown("# JSON Arranger")
    gr.Markdown("Browse categories of a JSON document, merge duplicate records and download the result.")

    # State
    document_state = gr.State()
    sort_state = gr.State(value=SortSpec())

    with gr.Row():
        # Left Panel: Source & Categories
        with gr.Column(scale=1):
            gr.Markdown("### Source")
            file_input = gr.File(label="Upload JSON File", file_types=[".json"])
            url_input = gr.Textbox(label="Or load from URL", value=config.source_url or "", placeholder="https://...")
            load_url_btn = gr.Button("Load URL")
            status_msg = gr.Textbox(label="Status", interactive=False)

            gr.Markdown("### Categories")
            category_selector = gr.Radio(label="Category", choices=[], interactive=True)

            aggregate_btn = gr.Button("Aggregate duplicates")
            download_btn = gr.Button("Download JSON", variant="primary")
            download_output = gr.File(label="Download Result")

            summary_md = gr.Markdown()

        # Right Panel: View
        with gr.Column(scale=3):
            with gr.Row():
                search_box = gr.Textbox(label="Filter", placeholder="filter rows (contains)", scale=3)
                row_count = gr.Textbox(label="Shown", interactive=False, scale=1)
            with gr.Row():
                sort_column = gr.Dropdown(
                    label="Sort by",
                    choices=[DEFAULT_SORT],
                    value=DEFAULT_SORT,
                    interactive=False,
                    scale=3,
                )
                flip_btn = gr.Button("Reverse order", scale=1)

            table_view = gr.Dataframe(label="Rows (click a cell to sort by its column)", interactive=False, wrap=True, visible=False)
            raw_view = gr.Code(label="Value", language="json", interactive=False, visible=False)
            message_view = gr.Markdown("No category selected")

            gr.Markdown("### Raw JSON")
            raw_editor = gr.Code(label="Document", language="json", interactive=True, lines=16)
            apply_edit_btn = gr.Button("Apply edits")

    view_outputs = [table_view, raw_view, message_view, sort_column, row_count]
    document_outputs = [
        document_state,
        category_selector,
        sort_state,
        status_msg,
        summary_md,
        raw_editor,
    ] + view_outputs

    demo.load(
        fn=partial(initial_load, config.source_path, config.source_url, config.fetch_timeout),
        inputs=[],
        outputs=document_outputs,
    )

    file_input.upload(
        fn=load_document_from_file,
        inputs=[file_input, document_state, category_selector, search_box, sort_state],
        outputs=document_outputs,
    )

    load_url_btn.click(
        fn=partial(load_document_from_url, timeout=config.fetch_timeout),
        inputs=[url_input, document_state, category_selector, search_box, sort_state],
        outputs=document_outputs,
    )

    category_selector.input(
        fn=select_category,
        inputs=[document_state, category_selector, search_box],
        outputs=[sort_state] + view_outputs,
    )

    search_box.change(
        fn=update_search,
        inputs=[document_state, category_selector, search_box, sort_state],
        outputs=view_outputs,
    )

    sort_column.input(
        fn=choose_sort_column,
        inputs=[document_state, category_selector, search_box, sort_state, sort_column],
        outputs=[sort_state] + view_outputs,
    )

    flip_btn.click(
        fn=flip_sort_direction,
        inputs=[document_state, category_selector, search_box, sort_state],
        outputs=[sort_state] + view_outputs,
    )

    table_view.select(
        fn=sort_by_selected_cell,
        inputs=[document_state, category_selector, search_box, sort_state],
        outputs=[sort_state] + view_outputs,
    )

    aggregate_btn.click(
        fn=aggregate_all,
        inputs=[document_state, category_selector, search_box, sort_state],
        outputs=document_outputs,
    )

    download_btn.click(
        fn=partial(download_document, export_filename=config.export_filename),
        inputs=[document_state],
        outputs=[download_output, status_msg],
    )

    apply_edit_btn.click(
        fn=apply_raw_edit,
        inputs=[document_state, raw_editor, category_selector, search_box, sort_state],
        outputs=document_outputs,
    )

if __name__ == "__main__":
    demo.launch(server_name=config.server_name, server_port=config.server_port)
