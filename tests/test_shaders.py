import pytest

from quadkit.shaders import PreprocessorConfig, ShaderIncludeError, preprocess_shader


def test_preprocessor():
    shader_string = """
#version blah blah

asd
asd

#include "hello.glsl"

qwe
"""
    preprocessed = """
#version blah blah

asd
asd

iii
jjj

qwe
"""
    result = preprocess_shader(
        shader_string,
        PreprocessorConfig(includes=[("hello.glsl", "iii\njjj")]),
    )
    assert result == preprocessed


def test_source_without_includes_is_unchanged():
    source = "void main() {}\n"
    assert preprocess_shader(source, PreprocessorConfig()) == source


def test_several_includes():
    config = PreprocessorConfig(includes=[("a", "AAA"), ("b", "B")])
    source = '#include "a"\n#include "b"\nend'
    assert preprocess_shader(source, config) == "AAA\nB\nend"


def test_extra_spaces_before_filename():
    config = PreprocessorConfig(includes=[("x.glsl", "X")])
    assert preprocess_shader('#include    "x.glsl";', config) == "X;"


def test_unknown_include_raises():
    with pytest.raises(ShaderIncludeError, match="missing.glsl"):
        preprocess_shader('#include "missing.glsl"', PreprocessorConfig())


def test_missing_quote_raises():
    config = PreprocessorConfig(includes=[("a", "A")])
    with pytest.raises(ShaderIncludeError):
        preprocess_shader("#include a", config)


def test_unterminated_filename_raises():
    config = PreprocessorConfig(includes=[("a", "A")])
    with pytest.raises(ShaderIncludeError):
        preprocess_shader('#include "a', config)


def test_default_config_has_no_includes():
    assert PreprocessorConfig().includes == []