from scoring.matcher import merge_synonyms
from scoring.policy import (
    FormatStyle,
    KeywordSpec,
    MatchingPolicy,
    PenaltyOrder,
    ScoringPolicy,
    build_cohorts,
    build_identity_labels,
    find_identity,
)
from utils.config import Config


def write_config(tmp_path, body):
    path = tmp_path / "config.yaml"
    path.write_text(body, encoding='utf-8')
    return str(path)


class TestConfigDefaults:

    def test_missing_file_uses_defaults(self, tmp_path):
        config = Config(str(tmp_path / "missing.yaml"))

        assert KeywordSpec.from_config(config).required == ("React", "JavaScript", "Accessibility")
        assert MatchingPolicy.from_config(config).strictness == 70
        policy = ScoringPolicy.from_config(config)
        assert policy.min_years == 3
        assert policy.pass_threshold == 70
        assert policy.format_style is FormatStyle.PLAIN
        assert len(policy.knockouts) == 3
        assert find_identity(build_identity_labels(config.identity_labels), config.identity).name == 'John'


class TestConfigFile:

    def test_values_loaded(self, tmp_path):
        path = write_config(tmp_path, """
required_keywords: [Python, SQL]
keyword_strictness: 40
section_weights:
  skills: 60
format_style: pdf
penalty_order: before_bias
knockouts: Felony
identity_labels:
  Ana: 0.5
cohorts:
  - {label: Group A, baseline: 50, sensitivity: 0.2}
extra_synonyms:
  python: [py]
""")
        config = Config(path)

        assert KeywordSpec.from_config(config).required == ("Python", "SQL")
        assert MatchingPolicy.from_config(config).strictness == 40
        policy = ScoringPolicy.from_config(config)
        assert policy.section_weights.skills == 60
        assert policy.section_weights.experience == 50
        assert policy.format_style is FormatStyle.PDF
        assert policy.penalty_order is PenaltyOrder.BEFORE_BIAS
        assert policy.knockouts == ("Felony",)
        assert [l.name for l in build_identity_labels(config.identity_labels)] == ['Ana']
        assert build_cohorts(config.cohorts)[0].label == 'Group A'
        assert merge_synonyms(config.extra_synonyms)['python'] == ('py',)

    def test_malformed_values_coerced(self, tmp_path):
        path = write_config(tmp_path, """
keyword_strictness: very
pass_threshold: 250
min_years: -4
section_weights: nonsense
""")
        config = Config(path)

        assert MatchingPolicy.from_config(config).strictness == 70
        policy = ScoringPolicy.from_config(config)
        assert policy.pass_threshold == 100
        assert policy.min_years == 0
        assert policy.section_weights.total == 100

    def test_huge_integer_strictness_clamps(self, tmp_path):
        config = Config(write_config(tmp_path, f"keyword_strictness: {'9' * 400}\n"))
        assert MatchingPolicy.from_config(config).strictness == 100

    def test_scalar_keywords_and_knockouts(self, tmp_path):
        config = Config(write_config(tmp_path, "required_keywords: 5\npreferred_keywords: true\nknockouts: 7\n"))

        keywords = KeywordSpec.from_config(config)
        assert keywords.required == ("5",)
        assert keywords.preferred == ("True",)
        assert ScoringPolicy.from_config(config).knockouts == ("7",)

    def test_keyword_mapping_ignored(self, tmp_path):
        config = Config(write_config(tmp_path, "required_keywords: {react: 1}\n"))
        assert KeywordSpec.from_config(config).required == ()

    def test_synonym_list_ignored(self, tmp_path):
        config = Config(write_config(tmp_path, "extra_synonyms: [py]\n"))
        assert merge_synonyms(config.extra_synonyms)['javascript'] == ('js',)

    def test_malformed_synonym_values_skipped(self, tmp_path):
        config = Config(write_config(tmp_path, """
extra_synonyms:
  python: 3
  golang: {go: 1}
  rust: [rs, 2]
"""))
        merged = merge_synonyms(config.extra_synonyms)

        assert 'python' not in merged
        assert 'golang' not in merged
        assert merged['rust'] == ('rs', '2')

    def test_invalid_yaml_keeps_defaults(self, tmp_path):
        config = Config(write_config(tmp_path, "keyword_strictness: [unclosed"))
        assert config.keyword_strictness == 70

    def test_non_mapping_yaml_ignored(self, tmp_path):
        config = Config(write_config(tmp_path, "- just\n- a list\n"))
        assert config.pass_threshold == 70


class TestEnvironmentOverrides:

    def test_env_wins_over_file(self, tmp_path, monkeypatch):
        path = write_config(tmp_path, "pass_threshold: 60\nformat_style: table\n")
        monkeypatch.setenv('ATS_PASS_THRESHOLD', '85')
        monkeypatch.setenv('ATS_STRICTNESS', '35')
        monkeypatch.setenv('ATS_IDENTITY', 'Kenya')
        monkeypatch.setenv('MAX_FILE_SIZE_MB', '2')

        config = Config(path)

        assert ScoringPolicy.from_config(config).pass_threshold == 85
        assert ScoringPolicy.from_config(config).format_style is FormatStyle.TABLE
        assert MatchingPolicy.from_config(config).strictness == 35
        assert config.identity == 'Kenya'
        assert config.max_file_size_mb == '2'
