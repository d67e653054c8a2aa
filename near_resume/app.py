"""
Near Résumé Formatter – Streamlit frontend.
No business logic in layout; extraction, rewrite and post-processing live in cv_pipeline.
"""

import json
from typing import Optional

import streamlit as st

from near_resume.config import OPENAI_API_KEY
from near_resume.cv_pipeline import apply_feedback, extract_text_from_file, process_resume, rewrite_resume
from near_resume.schemas.resume import Resume
from near_resume.services.session_store import SessionStore


@st.cache_resource
def _get_store() -> SessionStore:
    """One store per server process, shared across reruns."""
    return SessionStore()


def _process_upload(file_bytes: bytes, filename: str, detailed_format: bool) -> Optional[str]:
    """Extract, rewrite and normalize one upload; returns the new session id or sets an error."""
    text = extract_text_from_file(file_bytes, filename)
    if not text:
        st.session_state["error"] = "Could not extract text from the file. Use a text-based PDF or a DOCX."
        return None
    raw = rewrite_resume(text)
    if raw is None:
        st.session_state["error"] = "The résumé could not be rewritten. Check the logs and try again."
        return None
    raw["detailedFormat"] = detailed_format
    resume = process_resume(raw)
    session = _get_store().create(
        original_filename=filename,
        original_text=text,
        resume=resume,
        detailed_format=detailed_format,
    )
    return session.id


def _handle_feedback(session_id: str, message: str) -> None:
    """Apply one chat request to the stored résumé and record both turns."""
    store = _get_store()
    session = store.get(session_id)
    if session is None or session.resume is None:
        st.session_state["error"] = "Your session has expired. Upload the résumé again."
        st.session_state["session_id"] = None
        return
    store.add_message(session_id, "user", message)
    updated, changes = apply_feedback(message, session.resume)
    updated.setdefault("detailedFormat", session.detailed_format)
    store.update_resume(session_id, process_resume(updated))
    applied = [c for c in changes if c.get("type") != "note"]
    reply = "Updated your résumé." if applied else "No changes were applied."
    store.add_message(session_id, "assistant", reply, changes)


def _render_resume(resume: Resume) -> None:
    header = resume.header
    st.markdown(f"### {header.first_name or 'Candidate'}")
    st.caption(f"**{header.tagline or '—'}** · {header.location or '—'}")
    if resume.summary:
        st.markdown(resume.summary)
    for group in resume.skills:
        if group.items:
            st.markdown(f"**{group.category}:** " + " · ".join(group.items))
    for exp in resume.experience:
        st.markdown("---")
        st.markdown(f"**{exp.title or 'Role'}**, {exp.company or '—'}")
        st.caption(f"{exp.location or '—'} · {exp.start_date or '?'} – {exp.end_date or '?'}")
        for bullet in exp.bullets:
            metrics = f"  `{' · '.join(bullet.metrics)}`" if bullet.metrics else ""
            st.markdown(f"- {bullet.text}{metrics}")
    if resume.education:
        st.markdown("---")
        st.markdown("**Education**")
        for edu in resume.education:
            st.markdown(f"- {edu.degree}, {edu.institution} ({edu.year or '—'})")
    if resume.additional_experience and resume.include_additional_exp is not False:
        st.markdown("**Additional experience**")
        st.markdown(resume.additional_experience)


def render_layout() -> None:
    """Streamlit page layout: upload, processed résumé, chat feedback."""
    st.set_page_config(page_title="Near Résumé Formatter", layout="wide")
    st.title("Near Résumé Formatter")
    st.markdown("*Upload a résumé and get it back in the Near format.*")
    st.divider()

    if "session_id" not in st.session_state:
        st.session_state["session_id"] = None
    if "error" not in st.session_state:
        st.session_state["error"] = None

    # ----- Upload section -----
    with st.container():
        col1, col2 = st.columns([3, 1])
        with col1:
            uploaded = st.file_uploader("Résumé (PDF or DOCX)", type=["pdf", "docx"], key="resume_file")
        with col2:
            detailed_format = st.checkbox(
                "Detailed format",
                value=True,
                key="detailed_format",
                help="Denser layout hint carried with the résumé JSON.",
            )
        process_clicked = st.button("Process", type="primary", key="process_btn")

    if process_clicked:
        if uploaded is None:
            st.session_state["error"] = "Please upload a PDF or DOCX file."
        elif not OPENAI_API_KEY:
            st.session_state["error"] = "OPENAI_API_KEY is not set. Add it to your .env file."
        else:
            st.session_state["error"] = None
            with st.spinner("Extracting, rewriting and formatting your résumé…"):
                try:
                    session_id = _process_upload(uploaded.getvalue(), uploaded.name, detailed_format)
                    if session_id:
                        st.session_state["session_id"] = session_id
                except Exception as e:
                    st.session_state["error"] = f"Processing failed: {str(e)}"

    if st.session_state.get("error"):
        st.error(st.session_state["error"])

    session_id = st.session_state.get("session_id")
    session = _get_store().get(session_id) if session_id else None
    if session is None or session.resume is None:
        if not process_clicked and not st.session_state.get("error"):
            st.info("Upload a résumé, then click **Process**.")
        return

    st.divider()

    # ----- Results section -----
    col_a, col_b = st.columns([3, 2])
    with col_a:
        st.subheader("Processed résumé")
        _render_resume(session.resume)
        payload = json.dumps(session.resume.to_payload(), indent=2, ensure_ascii=False)
        st.download_button(
            "Download JSON",
            data=payload.encode("utf-8"),
            file_name="resume_near_format.json",
            mime="application/json",
            key="download_json",
        )
        with st.expander("JSON"):
            st.code(payload, language="json")

    # ----- Chat section -----
    with col_b:
        st.subheader("Request changes")
        for msg in session.messages:
            with st.chat_message(msg.role):
                st.markdown(msg.content)
                for change in msg.changes:
                    st.caption(f"{change.get('type', '')}: {change.get('description', '')}")
        request = st.chat_input("e.g. Make the summary more concise")
        if request:
            with st.spinner("Applying your changes…"):
                _handle_feedback(session.id, request)
            st.rerun()


if __name__ == "__main__":
    render_layout()
