import os, requests, streamlit as st

st.set_page_config(page_title="Screenshot Romance Coach", layout="wide")
st.title("Does Target like you?")

API_BASE = os.getenv("API_BASE", "http://127.0.0.1:8001")
IMPACT_BADGES = {"helped": "🟢 helped", "neutral": "⚪ neutral", "hurt": "🔴 hurt"}

uploaded = st.file_uploader(
    "Upload a screenshot of your conversation",
    type=["jpg", "jpeg", "png", "webp", "heic", "heif"],
)
analyze = st.button("Analyze", disabled=uploaded is None)

def call_api(endpoint, **kwargs):
    r = requests.post(API_BASE + endpoint, timeout=600, **kwargs)
    if not r.ok:
        st.error(f"{endpoint} → {r.status_code}: {r.text}")
        r.raise_for_status()
    return r.json()

if uploaded and analyze:
    with st.spinner("Reading the vibes..."):
        data = call_api("/api/upload", files={"file": (uploaded.name, uploaded.getvalue(), uploaded.type)})
    st.session_state["analysis"] = data["analysis"]["analysis"]

analysis = st.session_state.get("analysis")
if analysis:
    c1, c2 = st.columns([1, 2])
    c1.metric("Romantic interest", f"{analysis['romanticInterestScore']}/100")
    c1.caption(f"Confidence: {analysis['confidence']}")
    if analysis["model"]["provider"] == "mock":
        c1.warning("The AI model was unavailable, so this is a keyword-based estimate.")
    c2.markdown(analysis["summary"])

    st.subheader("Message by message")
    messages = {m["id"]: m for m in analysis["parsedMessages"]}
    for insight in analysis["messageInsights"]:
        msg = messages.get(insight["messageId"], {})
        who = "Target" if insight["sender"] == "personA" else "You"
        st.markdown(f"**{who}:** {msg.get('text', '')}")
        st.caption(f"{IMPACT_BADGES[insight['impact']]} · {insight['explanation']} ({insight['confidence']})")

    st.subheader("Suggestions")
    for s in analysis["suggestions"]:
        st.markdown(f"- {s}")

    st.subheader("Ask Cupid")
    question = st.text_input("Ask a follow-up question about this conversation")
    if st.button("Ask") and question.strip():
        with st.spinner("Cupid is thinking..."):
            reply = call_api("/api/cupid", json={"question": question, "conversation": analysis["parsedMessages"]})
        st.info(reply["answer"])
else:
    st.info("Upload a screenshot to get started.")
