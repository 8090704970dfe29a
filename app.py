"""
ATS Bias Simulator Streamlit Application
See how the same resume passes or fails depending on invisible screening settings.
"""
import streamlit as st
import pandas as pd
import time
import html
from typing import List

from extractors.document_loader import DocumentLoader, ResumeSession
from scoring.matcher import merge_synonyms
from scoring.policy import (
    FormatStyle,
    KeywordSpec,
    MatchingPolicy,
    ScoringPolicy,
    SectionWeights,
    build_cohorts,
    build_identity_labels,
    find_identity,
)
from scoring.projections import compare_identities, project_cohorts
from scoring.resume import ResumeDocument
from scoring.samples import SAMPLES
from scoring.scorer import ATSScorer, ScoreResult
from utils.config import Config
from utils.export import projections_to_csv, projections_to_frame, result_to_json
from utils.file_helpers import validate_file
from utils.logging_config import setup_logging
from utils.sanitizers import coerce_number

config = Config()
logger = setup_logging(config.log_level)

st.set_page_config(
    page_title="ATS Bias Simulator",
    page_icon="⚖️",
    layout="wide",
    initial_sidebar_state="collapsed"
)

st.markdown("""
<style>
    .stApp {
        max-width: 1400px;
        margin: 0 auto;
    }
    .decision-pass {
        color: #28a745;
        font-weight: bold;
    }
    .decision-reject {
        color: #dc3545;
        font-weight: bold;
    }
    .missing-skill {
        background-color: #fff3cd;
        padding: 2px 6px;
        border-radius: 3px;
        margin: 2px;
        display: inline-block;
    }
    .matched-skill {
        background-color: #d4edda;
        padding: 2px 6px;
        border-radius: 3px;
        margin: 2px;
        display: inline-block;
    }
</style>
""", unsafe_allow_html=True)

EDITOR_KEY = 'resume_editor'
UPLOAD_KEY = 'resume_upload'


def chips(items: List[str], css_class: str) -> str:
    return " ".join(f'<span class="{css_class}">{html.escape(item)}</span>' for item in items)


class ATSBiasSimulatorApp:
    """Interactive screening simulator."""

    def __init__(self, config: Config):
        """Initialize application."""
        self.config = config
        self.loader = DocumentLoader(config)
        self.scorer = ATSScorer(merge_synonyms(config.extra_synonyms))
        self.identity_labels = build_identity_labels(config.identity_labels)
        self.cohorts = build_cohorts(config.cohorts)

        if 'session' not in st.session_state:
            st.session_state.session = ResumeSession(SAMPLES['engineering'])
        if EDITOR_KEY not in st.session_state:
            st.session_state[EDITOR_KEY] = st.session_state.session.text

    @property
    def session(self) -> ResumeSession:
        return st.session_state.session

    def _load_sample(self, name: str) -> None:
        self.session.set_text(SAMPLES[name])
        st.session_state[EDITOR_KEY] = self.session.text

    def _on_edit(self) -> None:
        self.session.set_text(st.session_state[EDITOR_KEY])

    def _on_upload(self) -> None:
        file = st.session_state.get(UPLOAD_KEY)
        if file is None:
            return

        is_valid, error = validate_file(file, self.config)
        if not is_valid:
            self.session.message = f"{file.name}: {error}"
            return

        outcome = self.session.upload(self.loader, file.getvalue(), file.name)
        if outcome.applied:
            st.session_state[EDITOR_KEY] = self.session.text

    def render_header(self) -> str:
        """Render hero text and the name swap control; returns the chosen name."""
        col1, col2 = st.columns([3, 1])

        with col1:
            st.caption("Interactive ATS bias tester")
            st.title("See how the same resume passes or fails based on invisible settings.")
            st.write(
                "Adjust parsing knobs, swap names from the UW study (John vs Demetrius vs Kenya), "
                "and watch how keywords, formatting, and resume length change the score."
            )
            st.markdown(
                "Source study (UW): "
                "[AIES paper](https://ojs.aaai.org/index.php/AIES/article/view/31748/33915)"
            )

        with col2:
            names = [label.name for label in self.identity_labels]
            default = find_identity(self.identity_labels, self.config.identity).name
            selected = st.radio(
                "Name swap tool",
                names,
                index=names.index(default),
                help="Same resume, different names → different scores below."
            )

        st.markdown("---")
        return selected

    def render_input_section(self):
        """Render resume input and policy controls; returns the policy values."""
        st.subheader("📄 Upload or craft a resume")

        col_a, col_b, col_c = st.columns(3)
        col_a.button("Insert sample (engineering)", on_click=self._load_sample, args=('engineering',))
        col_b.button("Insert shorter resume", on_click=self._load_sample, args=('short',))
        col_c.file_uploader(
            "Upload .txt or .pdf",
            type=['txt', 'pdf'],
            key=UPLOAD_KEY,
            on_change=self._on_upload
        )

        st.text_area("Resume text", key=EDITOR_KEY, height=360, on_change=self._on_edit)
        if self.session.message:
            st.caption(self.session.message)

        st.markdown("---")

        strictness = st.slider(
            "Keyword matching strictness",
            30, 100,
            coerce_number(self.config.keyword_strictness, 70, 30, 100, integer=True),
            help="Higher strictness requires exact phrases and ignores synonyms; "
                 "lower allows semantic/partial hits."
        )
        matching = MatchingPolicy(strictness)
        st.caption(f"Mode: **{matching.mode.value.title()}**")

        defaults = SectionWeights.from_mapping(self.config.section_weights)
        st.markdown("**Section weights (must total 100)**")
        col_w1, col_w2, col_w3 = st.columns(3)
        w_experience = col_w1.number_input("Experience", 0, 100, int(defaults.experience))
        w_skills = col_w2.number_input("Skills", 0, 100, int(defaults.skills))
        w_education = col_w3.number_input("Education", 0, 100, int(defaults.education))
        weights = SectionWeights(w_experience, w_skills, w_education)
        if weights.total != 100:
            st.warning(f"⚠️ Weights sum to {weights.total:.0f}.")

        min_years = st.slider(
            "Minimum years of experience",
            0, 15,
            coerce_number(self.config.min_years, 3, 0, 15, integer=True)
        )

        required_input = st.text_input(
            "Required keywords", ", ".join(KeywordSpec.from_config(self.config).required),
            placeholder="Comma-separated"
        )
        preferred_input = st.text_input(
            "Preferred keywords", ", ".join(KeywordSpec.from_config(self.config).preferred),
            placeholder="Comma-separated"
        )
        keywords = KeywordSpec.from_input(required_input, preferred_input)

        knockout_input = st.text_area(
            "Knockout criteria (one per line, auto reject)",
            "\n".join(self.config.knockouts),
            height=100
        )

        styles = list(FormatStyle)
        format_style = st.radio(
            "Format impact",
            styles,
            index=styles.index(FormatStyle.coerce(self.config.format_style)),
            format_func=lambda style: style.label,
            horizontal=True
        )
        st.caption(format_style.note)

        pass_threshold = st.slider(
            "Pass threshold",
            40, 90,
            coerce_number(self.config.pass_threshold, 70, 40, 90, integer=True),
            help="Higher thresholds compress pass rates across every demographic."
        )

        scoring = ScoringPolicy(
            section_weights=weights,
            min_years=min_years,
            format_style=format_style,
            pass_threshold=pass_threshold,
            knockouts=tuple(knockout_input.splitlines()),
            penalty_order=self.config.penalty_order,
        )
        return keywords, matching, scoring

    def render_results(self, document: ResumeDocument, result: ScoreResult,
                       matching: MatchingPolicy, scoring: ScoringPolicy) -> None:
        """Render score, breakdown, comparisons and projections."""
        st.subheader("📊 How the ATS scores this resume")

        col1, col2 = st.columns(2)
        css = 'decision-pass' if result.passed else 'decision-reject'
        col1.markdown(f"Decision: <span class='{css}'>{result.decision.value}</span>", unsafe_allow_html=True)
        col2.metric("Score", f"{round(result.final_score)}")
        st.progress(int(round(result.final_score)) / 100)

        st.markdown("### 🔍 Parsed resume view")
        col_s1, col_s2, col_s3 = st.columns(3)
        for column, (section, limit) in zip(
            (col_s1, col_s2, col_s3), (('experience', 5), ('education', 3), ('skills', 8))
        ):
            with column:
                st.markdown(f"**{section.title()}**")
                for line in document.preview(section, limit):
                    st.write(f"- {line}")

        st.markdown(f"### 🔑 Keyword match ({round(result.required_ratio * 100)}% required)")
        if result.found_keywords:
            st.markdown(chips(list(result.found_keywords), 'matched-skill'), unsafe_allow_html=True)
        if result.missing_required:
            st.write("⚠️ **Missing:**")
            st.markdown(chips(list(result.missing_required), 'missing-skill'), unsafe_allow_html=True)
        else:
            st.caption("All required keywords detected.")

        st.markdown(f"### 🧮 Scoring breakdown ({result.identity})")
        col_b1, col_b2, col_b3 = st.columns(3)
        col_b1.metric("Base score", f"{round(result.base_score)}")
        col_b2.metric("Name bias factor", f"{result.bias_factor:.2f}x")
        col_b3.metric("Format penalty", f"-{result.format_penalty:.1f}")
        col_b4, col_b5, col_b6 = st.columns(3)
        col_b4.metric("Short resume bias", "-22%" if result.is_short else "Neutral",
                      help=f"{result.word_count} words")
        col_b5.metric("Experience read", f"{result.experience_years} yrs",
                      help=f"Min threshold: {result.min_years} yrs")
        col_b6.metric("Knockout", "Triggered" if result.knockout_triggered else "None")

        identities = compare_identities(result, self.identity_labels, scoring)
        st.markdown("### 👥 Name swap (same resume)")
        for entry in identities:
            st.write(f"**{entry.name}** · bias factor {entry.bias_factor:.2f}x · score {round(entry.score)}")
            st.progress(int(round(entry.score)) / 100)

        st.markdown("### 🕵️ Proxy indicators")
        if result.proxy_signals:
            st.markdown(chips(list(result.proxy_signals), 'missing-skill'), unsafe_allow_html=True)
        else:
            st.caption(
                "Add school names, organizations, or word choices that can proxy demographics. "
                "ATS can weigh them unintentionally."
            )

        cohorts = project_cohorts(self.cohorts, matching, scoring, result.is_short)
        st.markdown("### 📉 Demographic pass rates (simulated)")
        df_cohorts = pd.DataFrame([
            {'Cohort': c.label, 'Baseline': f"{c.baseline:.0f}%", 'Projected': f"{c.adjusted_rate:.0f}%"}
            for c in cohorts
        ])
        st.dataframe(df_cohorts, use_container_width=True, hide_index=True)
        st.caption(
            "Higher strictness, PDF uploads, and higher thresholds compress pass rates, and "
            "disproportionately lower them for groups that already start lower."
        )

        st.markdown("### 💾 Export Results")
        col_dl1, col_dl2 = st.columns(2)
        with col_dl1:
            st.download_button(
                label="📥 Download JSON",
                data=result_to_json(result, cohorts, identities),
                file_name=f"ats_simulation_{int(time.time())}.json",
                mime="application/json"
            )
        with col_dl2:
            st.download_button(
                label="📥 Download CSV",
                data=projections_to_csv(cohorts, identities),
                file_name=f"ats_projections_{int(time.time())}.csv",
                mime="text/csv"
            )

        with st.expander("Projection table"):
            st.dataframe(projections_to_frame(cohorts, identities), use_container_width=True)

    def run(self) -> None:
        """Main application loop."""
        selected_name = self.render_header()
        identity = find_identity(self.identity_labels, selected_name)

        col_in, col_out = st.columns([1, 1])
        with col_in:
            keywords, matching, scoring = self.render_input_section()

        document = ResumeDocument.from_text(self.session.text)
        result = self.scorer.compute_score(document, keywords, matching, scoring, identity)

        with col_out:
            self.render_results(document, result, matching, scoring)


def main():
    """Entry point."""
    try:
        app = ATSBiasSimulatorApp(config)
        app.run()
    except Exception as e:
        logger.critical(f"Fatal error: {str(e)}", exc_info=True)
        st.error("Critical error. Please refresh the page.")


if __name__ == "__main__":
    main()
