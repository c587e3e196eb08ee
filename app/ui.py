# Run from project root: streamlit run app/ui.py
# UI talks to the backend API (POST /api/ask-ai). History is shown locally only; the backend keeps none.

import os

import requests
import streamlit as st

# Backend config
API_BASE = os.environ.get("API_BASE", "http://localhost:8000")
ASK_URL = f"{API_BASE}/api/ask-ai"

st.title("Ask my AI Assistant")
st.caption("Questions about experience, skills, projects and contact details are answered from my profile.")

try:
    r = requests.get(f"{API_BASE}/health", timeout=10)
    if not r.ok:
        st.caption("Backend is up but unhealthy.")
except requests.RequestException:
    st.caption("Backend not reachable, start the API first.")

if "messages" not in st.session_state:
    st.session_state.messages = []
if st.button("Clear", key="clear_chat"):
    st.session_state.messages = []
    st.rerun()

for msg in st.session_state.messages:
    with st.chat_message(msg["role"]):
        st.markdown(msg["content"])

# If we just submitted a query, ask the backend while showing "Thinking..."
if st.session_state.get("pending_query"):
    query = st.session_state.pending_query
    with st.chat_message("assistant"):
        placeholder = st.empty()
        placeholder.caption("Thinking...")
        try:
            r = requests.post(ASK_URL, json={"query": query}, timeout=90)
            try:
                data = r.json()
            except ValueError:
                data = {}
            if r.ok:
                reply = data.get("text", "") or "No answer."
                placeholder.markdown(reply)
            else:
                reply = data.get("error") or f"Error: {r.status_code}"
                if data.get("details"):
                    reply = f"{reply} ({data['details']})"
                placeholder.error(reply)
        except requests.RequestException as e:
            reply = f"Connection failed: {e}"
            placeholder.error(reply)
        st.session_state.messages.append({"role": "assistant", "content": reply})
    del st.session_state["pending_query"]
    st.rerun()

if prompt := st.chat_input("Ask about my skills, experience, or projects"):
    st.session_state.messages.append({"role": "user", "content": prompt})
    st.session_state.pending_query = prompt
    st.rerun()
