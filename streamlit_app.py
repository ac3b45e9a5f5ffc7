"""BrightPath Studio chat - Streamlit App with Chat UI."""

import streamlit as st
from config.settings import Settings
from schemas.business import BRIGHTPATH_STUDIO
from orchestrator import RelayController


ASSISTANT_AVATAR = "💼"

st.set_page_config(
    page_title=BRIGHTPATH_STUDIO.name,
    page_icon="💬",
    layout="centered"
)


def get_controller(settings: Settings) -> RelayController:
    """Get or create the relay controller for this browser session."""
    key = (settings.llm_provider, settings.db_path)
    if st.session_state.get("controller") is None or st.session_state.get("controller_key") != key:
        st.session_state.controller = RelayController.from_settings(settings)
        st.session_state.controller_key = key
    return st.session_state.controller


# Sidebar configuration
st.sidebar.header("Configuration")

llm_provider = st.sidebar.selectbox(
    "LLM Provider",
    options=["openai", "anthropic"],
    index=0,
    help="Provider that writes the assistant's replies"
)

with st.sidebar.expander("Advanced Settings"):
    db_path = st.text_input(
        "History Database Path",
        value="data/chat_history.db",
        help="SQLite file where the chat history is kept"
    )

controller = get_controller(Settings(llm_provider=llm_provider, db_path=db_path))

# Clear history button
if st.sidebar.button("Clear Chat", type="secondary"):
    controller.reset()
    st.rerun()

# Header
st.title(f"{BRIGHTPATH_STUDIO.avatar} · {BRIGHTPATH_STUDIO.name}")
st.caption(BRIGHTPATH_STUDIO.tagline)

# Display chat messages
for message in controller.transcript:
    avatar = None if message.role.value == "user" else ASSISTANT_AVATAR
    with st.chat_message(message.role.value, avatar=avatar):
        st.markdown(message.content)
        st.caption(message.timestamp.astimezone().strftime("%H:%M"))

# Chat input; the spinner below is the pending indicator
if prompt := st.chat_input("Type a message"):
    with st.chat_message("user"):
        st.markdown(prompt.strip())

    with st.chat_message("assistant", avatar=ASSISTANT_AVATAR):
        with st.spinner("typing…"):
            controller.submit_user_turn(prompt)

    st.rerun()
