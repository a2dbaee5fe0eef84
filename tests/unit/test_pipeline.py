"""Tests for classifier pipeline precedence."""

from sqlscan.core.matchers import BoundaryMatcher, CommentMatcher, WordMatcher
from sqlscan.core.pipeline import ClassifierPipeline
from sqlscan.core.tokens import Token, TokenKind
from sqlscan.core.vocabulary import CompiledVocabulary

K = TokenKind


class TestClassifierPipeline:
    """Tests for ClassifierPipeline."""

    def test_default_order(self, vocabulary: CompiledVocabulary):
        pipeline = ClassifierPipeline.default(vocabulary)
        assert pipeline.names == (
            "whitespace",
            "comment",
            "quoted",
            "variable",
            "numeral",
            "boundary",
            "reserved",
            "function",
            "word",
        )
        assert len(pipeline.matchers) == 9

    def test_comment_before_boundary(self, vocabulary: CompiledVocabulary):
        """'--' starts a comment even though '-' is a boundary."""
        pipeline = ClassifierPipeline.default(vocabulary)
        assert pipeline.match("-- x\n", None) == (Token(kind=K.COMMENT, text="-- x"), "comment")

    def test_earlier_matcher_wins_over_longer_match(self, vocabulary: CompiledVocabulary):
        pipeline = ClassifierPipeline([BoundaryMatcher(vocabulary), CommentMatcher()])
        token, name = pipeline.match("--x", None)
        assert token == Token(kind=K.BOUNDARY, text="-")
        assert name == "boundary"

    def test_number_before_boundary(self, vocabulary: CompiledVocabulary):
        pipeline = ClassifierPipeline.default(vocabulary)
        assert pipeline.classify("-1 ", None) == Token(kind=K.NUMBER, text="-1")
        assert pipeline.classify("-1 ", Token(kind=K.WORD, text="a")) == Token(
            kind=K.BOUNDARY, text="-"
        )

    def test_reserved_before_function(self, vocabulary: CompiledVocabulary):
        """A word in both lists is reserved when followed by a terminator."""
        pipeline = ClassifierPipeline.default(vocabulary)
        assert pipeline.classify("NOW()", None).kind is K.RESERVED

    def test_function_before_word(self, vocabulary: CompiledVocabulary):
        pipeline = ClassifierPipeline.default(vocabulary)
        assert pipeline.classify("COUNT(*)", None) == Token(
            kind=K.WORD, text="COUNT", function=True
        )

    def test_empty_pipeline_falls_back_to_error(self):
        pipeline = ClassifierPipeline([])
        assert pipeline.names == ()
        assert pipeline.match("abc", None) == (Token(kind=K.ERROR, text="a"), None)

    def test_custom_pipeline(self):
        pipeline = ClassifierPipeline([WordMatcher()])
        assert pipeline.classify("SELECT x", None) == Token(kind=K.WORD, text="SELECT")
