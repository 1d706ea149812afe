"""
Streamlit web interface for FrameMapper.

Pick a framework you know, one you want to learn, and a component or piece of
functionality; the app shows an AI-generated side-by-side comparison.
"""

import streamlit as st
from dotenv import load_dotenv

from framemapper.actions import handle_feedback, handle_generate_comparison
from framemapper.frameworks import SAMPLE_FRAMEWORKS, framework_label, guess_language
from framemapper.models import ActionState, ComparisonResult, FrameworkKind, FrameworkPresentation
from framemapper.pipeline.comparison import create_pipeline
from framemapper.pipeline.generation import DEFAULT_MODELS
from framemapper.pipeline.images import decode_data_uri
from framemapper.utils.llm_logger import get_logger

# Load environment variables
load_dotenv()

# Page configuration
st.set_page_config(
    page_title="FrameMapper",
    page_icon="🧭",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Custom CSS
st.markdown("""
<style>
    .main-header {
        font-size: 2.5rem;
        font-weight: 700;
        margin-bottom: 0.5rem;
    }
    .sub-header {
        font-size: 1.2rem;
        color: #666;
        margin-bottom: 2rem;
    }
</style>
""", unsafe_allow_html=True)

# Initialize session state
if "action_state" not in st.session_state:
    st.session_state.action_state = ActionState()
if "current_comparison" not in st.session_state:
    st.session_state.current_comparison = None
if "feedback_submitted" not in st.session_state:
    st.session_state.feedback_submitted = False

FRAMEWORK_VALUES = [value for value, _ in SAMPLE_FRAMEWORKS]


@st.cache_resource(show_spinner=False)
def get_pipeline(provider: str, model_name: str, temperature: float, enable_images: bool):
    """One pipeline per settings combination, shared across reruns."""
    return create_pipeline(
        provider=provider,
        model_name=model_name,
        temperature=temperature,
        enable_images=enable_images,
    )


def main():
    """Main application entry point."""

    st.markdown('<div class="main-header">🧭 FrameMapper</div>', unsafe_allow_html=True)
    st.markdown(
        '<div class="sub-header">Unlock new tech skills, faster. Translate concepts from '
        'frameworks you know to ones you want to learn.</div>',
        unsafe_allow_html=True
    )

    with st.sidebar:
        st.header("⚙️ Configuration")

        provider = st.selectbox(
            "Provider",
            list(DEFAULT_MODELS),
            index=0,
            help="Select the LLM provider for generation"
        )
        model_name = st.text_input("Model", value=DEFAULT_MODELS[provider])
        temperature = st.slider(
            "Temperature",
            min_value=0.0,
            max_value=1.0,
            value=0.4,
            step=0.1,
            help="Lower = more deterministic, Higher = more creative"
        )
        enable_images = st.checkbox(
            "Generate spreadsheet images",
            value=True,
            help="Requires GOOGLE_API_KEY; skipped silently otherwise"
        )

    comparison_form(provider, model_name, temperature, enable_images)

    state: ActionState = st.session_state.action_state
    comparison = st.session_state.current_comparison

    if state.error and comparison is None:
        st.error(f"**Error Generating Comparison**\n\n{state.error}")
    elif state.error:
        st.toast(state.error, icon="❌")

    if comparison is not None:
        comparison_display(comparison)
        feedback_form(comparison)


def comparison_form(provider, model_name, temperature, enable_images):
    """Framework/component form; stores the resulting ActionState."""

    st.header("Framework Comparison")

    with st.form("comparison_form"):
        familiar = st.selectbox(
            "Familiar Framework",
            FRAMEWORK_VALUES,
            index=None,
            format_func=framework_label,
            placeholder="Select a framework you know",
        )
        target = st.selectbox(
            "Target Framework to Learn",
            FRAMEWORK_VALUES,
            index=None,
            format_func=framework_label,
            placeholder="Select a framework to learn",
        )
        component = st.text_input(
            "Component or Functionality to Compare",
            placeholder="e.g., 'State Management', 'Routing', 'Data Filtering'",
        )
        submitted = st.form_submit_button("🚀 Generate Comparison", type="primary")

    if not submitted:
        return

    form_data = {
        "familiarFramework": framework_label(familiar) if familiar else None,
        "targetFramework": framework_label(target) if target else None,
        "componentToCompare": component,
    }

    with st.spinner("🔄 Generating comparison..."):
        try:
            pipeline = get_pipeline(provider, model_name, temperature, enable_images)
        except Exception as e:
            # Setup failures such as a missing API key become a form error
            get_logger().log_error("streamlit", e)
            st.session_state.action_state = ActionState(error=f"Server Error: {e}")
            return
        state = handle_generate_comparison(st.session_state.action_state, form_data, pipeline)

    st.session_state.action_state = state
    if state.data is not None:
        st.session_state.current_comparison = state.data
        st.session_state.feedback_submitted = False
        st.toast(state.message, icon="✅")


def render_side(name: str, side: FrameworkPresentation, image_url):
    """Render one column of the comparison."""
    if side.kind == FrameworkKind.CODE:
        st.subheader(f"{name} Example")
        st.code(side.content, language=guess_language(name))
        return

    st.subheader(f"{name} Steps")
    st.markdown(side.content)
    if image_url:
        try:
            image_bytes, _ = decode_data_uri(image_url)
        except ValueError as e:
            get_logger().log_warning("streamlit", f"Could not decode image for {name}: {e}")
            return
        st.image(image_bytes, caption=f"{name} (AI-generated illustration)")


def comparison_display(result: ComparisonResult):
    """Display a generated comparison."""

    st.divider()
    st.header("Comparison Result")
    st.caption(f"AI-generated comparison of {result.name1} and {result.name2}.")

    st.subheader("Explanation")
    st.markdown(result.explanation)

    st.divider()

    col1, col2 = st.columns(2)
    with col1:
        render_side(result.name1, result.side1, result.image_url1)
    with col2:
        render_side(result.name2, result.side2, result.image_url2)


def feedback_form(result: ComparisonResult):
    """Rate the current comparison."""

    st.divider()
    if st.session_state.feedback_submitted:
        st.success("**Thank You!** Your feedback has been recorded.")
        return

    st.subheader("Rate this Comparison")
    with st.form("feedback_form"):
        rating = st.radio(
            "Was this comparison helpful?",
            [1, 2, 3, 4, 5],
            index=None,
            horizontal=True,
            format_func=lambda value: "⭐" * value,
        )
        submitted = st.form_submit_button("Submit Feedback")

    if not submitted:
        return

    state = handle_feedback(rating, result.name1, result.name2)
    if state.error:
        st.error(state.error)
    else:
        st.session_state.feedback_submitted = True
        st.toast(state.message, icon="🙏")
        st.rerun()


if __name__ == "__main__":
    main()
