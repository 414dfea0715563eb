"""
GalaDeck - Streamlit Deck Editor
Edit slide text, hint images and the background music before the show.
"""

import sys
from pathlib import Path

import streamlit as st

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from galadeck.core import AudioTrackRegistry, SlideKind, SlideStore
from galadeck.utils import (
    Config,
    LocalStorage,
    data_url_to_bytes,
    image_to_data_url,
    save_uploaded_audio,
)


# Page config
st.set_page_config(
    page_title="GalaDeck Editor",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Initialize session state
if 'selected_index' not in st.session_state:
    st.session_state.selected_index = 0


def slide_label(index: int, deck) -> str:
    slide = deck[index]
    return f"{index + 1}. {slide.title or '(untitled)'} [{slide.kind.value}]"


def render_sidebar(store: SlideStore, registry: AudioTrackRegistry):
    """Slide picker, background music and reset."""
    deck = store.deck
    topology = Config.quiz_topology()

    st.sidebar.title("GalaDeck")
    st.session_state.selected_index = st.sidebar.selectbox(
        "Slide",
        options=list(range(len(deck))),
        index=min(st.session_state.selected_index, len(deck) - 1),
        format_func=lambda i: slide_label(i, deck),
    )

    st.sidebar.caption(
        f"Quiz board: slide {topology.board + 1} · questions {topology.first_question + 1}-"
        f"{topology.last_question + 1} · credits: slide {topology.credits + 1}"
    )

    st.sidebar.subheader("Background music")
    if registry.is_user_supplied:
        st.sidebar.success(f"Using {Path(registry.source).name}")
    else:
        st.sidebar.info(f"Using the default track ({registry.source})")

    audio_file = st.sidebar.file_uploader(
        "Replace music (starts 30s in at the credits)",
        type=["mp3", "ogg", "wav", "flac"],
        key="audio_upload",
    )
    if audio_file is not None and st.sidebar.button("Use this music"):
        path = save_uploaded_audio(audio_file.getvalue(), audio_file.name, Config.AUDIO_DIR)
        registry.set_source(str(path))
        st.rerun()

    st.sidebar.divider()
    if st.sidebar.button("Restore default deck", type="secondary"):
        store.reset()
        st.session_state.selected_index = 0
        st.rerun()


def render_editor(store: SlideStore):
    """Form for the selected slide."""
    index = st.session_state.selected_index
    slide = store.deck[index]
    kinds = list(SlideKind)

    st.header(slide_label(index, store.deck))
    if slide.visited:
        st.caption("Already shown on the quiz board this session.")

    with st.form(f"slide_{slide.id}"):
        title = st.text_input("Title", value=slide.title)
        subtitle = st.text_input("Subtitle", value=slide.subtitle or "")
        kind = st.selectbox(
            "Layout",
            options=kinds,
            index=kinds.index(slide.kind),
            format_func=lambda k: k.value,
        )
        content = st.text_area(
            "Content (one line per row)",
            value="\n".join(slide.content),
            height=220,
        )
        if st.form_submit_button("Save slide", type="primary"):
            store.update_slide(slide.id, {
                "title": title,
                "subtitle": subtitle or None,
                "kind": kind,
                "content": content.split("\n") if content else [],
            })
            st.success("Saved")
            st.rerun()

    st.subheader("Hint image")
    col1, col2 = st.columns([2, 1])
    with col1:
        if slide.image:
            try:
                st.image(data_url_to_bytes(slide.image), use_container_width=True)
            except ValueError:
                st.image(slide.image, use_container_width=True)
        else:
            st.caption("No image on this slide.")
    with col2:
        image_file = st.file_uploader(
            "Upload image", type=["png", "jpg", "jpeg", "gif", "webp"], key=f"image_{slide.id}"
        )
        if image_file is not None and st.button("Attach image"):
            try:
                store.update_slide(slide.id, {"image": image_to_data_url(image_file.getvalue())})
                st.rerun()
            except ValueError as e:
                st.error(str(e))
        if slide.image and st.button("Remove image"):
            store.update_slide(slide.id, {"image": None})
            st.rerun()


def main():
    """Main application."""
    storage = LocalStorage(Config.DATA_DIR)
    # Reload on every rerun so edits made by the presenter window are not overwritten
    store = SlideStore(storage, topology=Config.quiz_topology())
    registry = AudioTrackRegistry(storage)

    render_sidebar(store, registry)
    render_editor(store)


if __name__ == "__main__":
    main()
