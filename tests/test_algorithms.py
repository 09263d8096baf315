import nlopt
import pytest

from boxopt.algorithms import (
    AlgNLoptGenetic,
    AlgNLoptMLSL,
    AlgNLoptSimplex,
    AlgNLoptSubplex,
    Method,
    NLoptAlg,
    NLoptAlgComb,
)


def test_method_codes_resolve_to_engine_constants():
    assert Method.LN_SBPLX.code == nlopt.LN_SBPLX
    assert Method.GN_ESCH.code == nlopt.GN_ESCH
    assert Method.LN_NELDERMEAD.code == nlopt.LN_NELDERMEAD


@pytest.mark.parametrize("method", list(Method))
def test_every_method_is_either_global_or_local(method: Method):
    assert method.is_global != method.is_local
    assert isinstance(method.code, int)


def test_predefined_identities():
    assert AlgNLoptSubplex == NLoptAlg(Method.LN_SBPLX)
    assert AlgNLoptSimplex == NLoptAlg(Method.LN_NELDERMEAD)
    assert AlgNLoptGenetic == NLoptAlgComb(Method.GN_ESCH, Method.LN_NELDERMEAD)
    assert AlgNLoptMLSL.local_method is Method.LN_SBPLX


def test_combination_defaults_to_nelder_mead():
    comb = NLoptAlgComb(Method.GN_DIRECT)
    assert comb.local_method is Method.LN_NELDERMEAD


def test_combination_rejects_local_as_global():
    with pytest.raises(ValueError, match="not a global algorithm"):
        NLoptAlgComb(Method.LN_SBPLX)


def test_combination_rejects_global_as_refinement():
    with pytest.raises(ValueError, match="not a local algorithm"):
        NLoptAlgComb(Method.GN_ESCH, Method.GN_DIRECT)


def test_identities_require_method_members():
    with pytest.raises(TypeError):
        NLoptAlg("LN_SBPLX")
    with pytest.raises(TypeError):
        NLoptAlgComb(Method.GN_ESCH, nlopt.LN_SBPLX)


def test_identities_are_hashable_values():
    assert hash(NLoptAlg(Method.LN_SBPLX)) == hash(AlgNLoptSubplex)
    assert len({AlgNLoptSubplex, NLoptAlg(Method.LN_SBPLX), AlgNLoptSimplex}) == 2
