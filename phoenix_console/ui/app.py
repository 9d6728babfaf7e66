import streamlit as st

from phoenix_console.api.facade import HRPhoenixApi
from phoenix_console.config import ConsoleSettings
from phoenix_console.logging_config import get_app_logger
from phoenix_console.ui.components import PAGES, release_controllers, render_sidebar

st.set_page_config(page_title="HR Phoenix Console", layout="wide")


def get_api() -> HRPhoenixApi:
    """One client facade per browser session."""
    if "phoenix_api" not in st.session_state:
        st.session_state.phoenix_api = HRPhoenixApi(ConsoleSettings.from_env())
    return st.session_state.phoenix_api


def main() -> None:
    logger = get_app_logger()
    api = get_api()
    page = render_sidebar(api.settings)
    if st.session_state.get("active_page") != page:
        release_controllers()
        st.session_state.active_page = page
    logger.debug("page_rendered", page=page)
    PAGES[page](api)


if __name__ == "__main__":
    main()
