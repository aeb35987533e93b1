"""
Weekly Shop - Home Page

Keeps one shopping list per week, stored in a hosted database.
"""

import streamlit as st

# Page configuration (must be first Streamlit command)
st.set_page_config(
    page_title="Weekly Shop",
    page_icon="🛒",
    layout="wide"
)

from config import configure_logging, get_settings

configure_logging(get_settings().log_level)

st.title("🛒 Weekly Shop")
st.markdown("Your shopping list for the week")

st.markdown("---")

st.markdown("### This Week's List")
st.markdown("""
- See the list for the current week (weeks start on Sunday)
- Start a new list when the week doesn't have one yet
- Search the list and adjust quantities as you go
""")
if st.button("Open Shopping List →", type="primary", use_container_width=True):
    st.switch_page("pages/1_🛒_Shopping_List.py")

st.markdown("---")
st.markdown("*Use the sidebar to navigate between pages.*")
