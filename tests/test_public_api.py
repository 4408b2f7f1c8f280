import decomo


def test_public_names_resolve():
    for name in decomo.__all__:
        assert getattr(decomo, name) is not None


def test_quick_start_runs():
    problem = decomo.ZDT1Problem(n_var=6)
    config = decomo.MOEADConfig.default(pop_size=20, n_var=problem.n_var)
    result = decomo.MOEAD(config).run(problem, decomo.MaxEvaluations(200), seed=1)
    front = decomo.pareto_filter(result["F"])
    assert 0 < front.shape[0] <= 20
