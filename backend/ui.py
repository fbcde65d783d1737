# Run from project root: streamlit run backend/ui.py
# Text stand-in for the voice avatar. The conversation lives in st.session_state and is posted whole to POST /api/chat each turn.

import os

import requests
import streamlit as st

# Backend config (the UI runs as a standalone script, outside the backend package)
API_BASE = os.environ.get("API_BASE", "http://localhost:8000")

st.title("Avatar chat")

# Personalities come from the backend; fall back to the default one if it is unreachable
personalities: list[dict] = []
try:
    r = requests.get(f"{API_BASE}/api/personalities", timeout=10)
    if r.ok:
        personalities = r.json().get("personalities") or []
    else:
        st.caption("Could not load personalities.")
except requests.RequestException:
    st.caption("Backend not reachable. Start the API first.")
if not personalities:
    personalities = [{"id": "alegra", "name": "Alegra", "description": ""}]

labels = {p["id"]: p["name"] for p in personalities}
personality_id = st.selectbox(
    "Personality",
    options=list(labels),
    format_func=lambda pid: labels[pid],
    key="personality_id",
)
description = next((p.get("description") for p in personalities if p["id"] == personality_id), "")
if description:
    st.caption(description)

if "messages" not in st.session_state:
    st.session_state.messages = []
# Switching personality starts a fresh conversation
if st.session_state.get("active_personality") != personality_id:
    st.session_state.active_personality = personality_id
    st.session_state.messages = []
    st.session_state.pop("chat_error", None)
if st.button("New chat", key="new_chat"):
    st.session_state.messages = []
    st.session_state.pop("chat_error", None)
    st.rerun()

for msg in st.session_state.messages:
    with st.chat_message(msg["role"]):
        st.markdown(msg["content"])

# A message was just submitted: show "Thinking..." while the backend answers
if st.session_state.get("pending_reply"):
    with st.chat_message("assistant"):
        thinking_placeholder = st.empty()
        thinking_placeholder.caption("Thinking...")
        error = None
        try:
            r = requests.post(
                f"{API_BASE}/api/chat",
                json={"messages": st.session_state.messages, "personalityId": personality_id},
                timeout=90,
            )
            if r.ok:
                answer = r.json().get("message") or "No answer."
                thinking_placeholder.markdown(answer)
                st.session_state.messages.append({"role": "assistant", "content": answer})
            else:
                detail = r.json().get("detail") if r.headers.get("content-type", "").startswith("application/json") else r.text[:200]
                error = f"Error: {r.status_code}: {detail}"
        except requests.RequestException as e:
            error = f"Connection failed: {e}"
        # Errors are shown but never become assistant turns sent back to the model
        if error:
            thinking_placeholder.empty()
            st.session_state.chat_error = error
    del st.session_state["pending_reply"]
    st.rerun()

if st.session_state.get("chat_error"):
    st.error(st.session_state.chat_error)

if prompt := st.chat_input("Escribe tu mensaje"):
    st.session_state.messages.append({"role": "user", "content": prompt})
    st.session_state.pop("chat_error", None)
    st.session_state.pending_reply = True
    st.rerun()
