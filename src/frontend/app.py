import os
import json
import streamlit as st
import requests
import pandas as pd
from dotenv import load_dotenv

import presentation as ui

load_dotenv()

# ── configurable via .env ──
API_BASE = os.getenv("API_BASE", "http://127.0.0.1:8000")
ANALYZE_TIMEOUT = int(os.getenv("ANALYZE_TIMEOUT", "300"))

st.set_page_config(page_title="Auditoría de Planes de Seguridad", page_icon="🛡️", layout="wide")
st.title("🛡️ Auditoría de Planes de Seguridad")

API = st.sidebar.text_input("API URL", API_BASE)

if "audit" not in st.session_state:
    st.session_state.audit = ui.initial_state()
    st.session_state.selection = ui.empty_selection()
    st.session_state.upload_error = None


# ---------- Input callbacks ----------
def _on_file_change():
    uploaded = st.session_state.get("plan_file")
    st.session_state.upload_error = None
    if uploaded is None:
        st.session_state.selection = ui.remove_file(st.session_state.selection)
        return
    try:
        st.session_state.selection = ui.attach_file(
            st.session_state.selection, uploaded.name, uploaded.type, uploaded.getvalue()
        )
        st.session_state.plan_text = ""
    except ui.UnsupportedFileError as e:
        st.session_state.upload_error = str(e)


def _on_text_change():
    st.session_state.selection = ui.set_text(st.session_state.selection, st.session_state.plan_text)


def _on_load_example():
    st.session_state.selection = ui.load_example(st.session_state.selection)
    st.session_state.plan_text = ui.EXAMPLE_PLAN


def _reset():
    st.session_state.audit = ui.reset(st.session_state.audit)


def _post_audit(audit: dict, payload: dict) -> dict:
    """Call the backend and return the next audit state. No Streamlit calls in here."""
    try:
        resp = requests.post(f"{API}/analyze", json=payload, timeout=ANALYZE_TIMEOUT)
    except requests.exceptions.Timeout:
        return ui.fail(audit, "La auditoría tardó demasiado. Prueba a aumentar ANALYZE_TIMEOUT.")
    except requests.exceptions.ConnectionError:
        return ui.fail(audit, "No se puede conectar con el backend. ¿Está el servidor en marcha?")

    if resp.ok:
        return ui.succeed(audit, resp.json())
    try:
        body = resp.json()
    except ValueError:
        body = {"detail": resp.text}
    message, code, remediation = ui.error_from_response(resp.status_code, body)
    return ui.fail(audit, message, code, remediation)


def _run_audit(payload: dict):
    audit = ui.begin(st.session_state.audit)
    st.session_state.audit = audit
    try:
        with st.spinner("Analizando..."):
            # Stored before the spinner exits: a rerun raised there must not lose the outcome
            st.session_state.audit = _post_audit(audit, payload)
    finally:
        st.session_state.audit = ui.interrupt(st.session_state.audit)


# ---------- Views ----------
def render_error(audit: dict):
    st.error(f"**Error al procesar la auditoría**\n\n{audit['error']}")
    if ui.needs_remediation(audit["error_code"]):
        steps = "\n".join(f"{i}. {s}" for i, s in enumerate(audit["remediation"], start=1))
        st.info(f"**Cómo solucionar esto:**\n\n{steps}")
    st.button("Entendido, intentar de nuevo", on_click=_reset)


def render_input(audit: dict):
    selection = st.session_state.selection
    has_file = selection["file"] is not None
    analyzing = audit["status"] == ui.ANALYZING

    st.caption(
        "Sube tu PDF o pega el contenido del plan. La IA analizará brechas, "
        "cumplimiento y riesgos potenciales."
    )
    st.file_uploader(
        "Arrastra tu PDF aquí", type=["pdf"], key="plan_file",
        on_change=_on_file_change, disabled=analyzing,
    )
    if st.session_state.upload_error:
        st.warning(st.session_state.upload_error)

    st.text_area(
        "O escribe manualmente",
        key="plan_text",
        height=200,
        placeholder=(
            "Archivo PDF seleccionado. Elimínalo para escribir texto."
            if has_file else "Pega aquí el texto del plan de seguridad..."
        ),
        on_change=_on_text_change,
        disabled=analyzing or has_file,
    )

    left, right = st.columns([1, 1])
    left.button("Cargar ejemplo texto", on_click=_on_load_example, disabled=analyzing or has_file)

    label = "Auditar PDF" if has_file else "Auditar Texto"
    text = st.session_state.get("plan_text", "")
    if right.button(label, type="primary", disabled=not ui.can_submit(text, has_file, analyzing)):
        if not has_file:
            st.session_state.selection = ui.set_text(selection, text)
        _run_audit(ui.build_payload(st.session_state.selection))
        st.rerun()


def render_report(report: dict):
    score = report["overallScore"]
    level = report["riskLevel"]

    head, chart = st.columns([3, 1])
    with head:
        st.subheader("Informe de Auditoría")
        st.markdown(
            f"<span style='border:1px solid {ui.risk_color(level)};color:{ui.risk_color(level)};"
            f"padding:2px 10px;border-radius:999px;font-weight:700'>{ui.risk_badge_label(level)}</span>",
            unsafe_allow_html=True,
        )
        st.write(report["executiveSummary"])
        st.markdown(f"🎯 Alineación: **{report['complianceAlignment']}**")
    with chart:
        st.markdown(
            f"<div style='text-align:center;font-size:3rem;font-weight:700;color:{ui.score_color(score)}'>"
            f"{ui.format_score(score)}</div><div style='text-align:center'>Puntuación global</div>",
            unsafe_allow_html=True,
        )
        st.progress(min(max(int(score), 0), 100))

    st.markdown("### Análisis por pilares")
    df = pd.DataFrame([{
        "Pilar": f"{ui.pillar_icon(c['category'])} {c['category']}",
        "Puntuación": ui.format_score(c["score"]),
        "Estado": c["status"],
        "Observación": c["observation"],
    } for c in report["detailedAnalysis"]])

    def color(val):
        return f"color: {ui.STATUS_COLORS.get(val, '#94a3b8')}; font-weight: 600"

    st.dataframe(df.style.map(color, subset=["Estado"]), hide_index=True, use_container_width=True)

    weak_col, side_col = st.columns([1, 1])
    with weak_col:
        st.markdown("### Vulnerabilidades Críticas")
        for w in report["weaknesses"]:
            sev_color = ui.SEVERITY_COLORS.get(w["severity"], "#94a3b8")
            st.markdown(
                f"**{w['title']}** <span style='color:{sev_color}'>({w['severity']})</span>",
                unsafe_allow_html=True,
            )
            st.caption(w["description"])
        if not report["weaknesses"]:
            st.write("No se detectaron vulnerabilidades críticas.")
    with side_col:
        st.markdown("### Fortalezas Detectadas")
        for s in report["strengths"]:
            st.markdown(f"- ✅ {s}")
        if not report["strengths"]:
            st.write("No se identificaron fortalezas significativas.")

        st.markdown("### Recomendaciones Clave")
        for i, rec in enumerate(report["recommendations"], start=1):
            st.markdown(f"{i}. {rec}")

    st.download_button(
        "Descargar informe (JSON)",
        data=json.dumps(report, ensure_ascii=False, indent=2),
        file_name="informe_auditoria.json",
        mime="application/json",
    )
    st.button("Analizar otro documento", on_click=_reset)


# Runs are sequential per session, so "analyzing" here is left over from an interrupted run
st.session_state.audit = ui.interrupt(st.session_state.audit)
audit = st.session_state.audit
if audit["status"] == ui.ERROR:
    render_error(audit)
elif audit["status"] == ui.COMPLETE and audit["report"]:
    render_report(audit["report"])
else:
    render_input(audit)
