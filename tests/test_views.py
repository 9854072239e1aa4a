"""Tests for the HTTP endpoints."""

from contest_sniffer.scrapers.common import Phase
from contest_sniffer.services.formatter import ERROR_MESSAGE, NO_MATCH_MESSAGE
from contest_sniffer.services.pipeline import ContestPipeline, PipelineError
from conftest import NOW, FakeScraper, make_contest


def _install(app, *sources):
    pipeline = ContestPipeline(list(sources), app.extensions['sniffer_config'])
    app.extensions['contest_pipeline'] = pipeline
    return pipeline


class FailingPipeline:
    def run(self, options=None):
        raise PipelineError('all down')


class TestIndex:
    def test_redirects_to_command(self, client):
        resp = client.get('/')
        assert resp.status_code == 302
        assert resp.headers['Location'].endswith('/oi')


class TestContestsAPI:
    def test_contests_json(self, app, client):
        _install(app, FakeScraper('Codeforces', [
            make_contest('Round 1', int(9e9), phase=Phase.UPCOMING, url='https://codeforces.com/contests/1'),
        ]))

        resp = client.get('/api/contests')

        assert resp.status_code == 200
        data = resp.get_json()
        assert data['count'] == 1
        contest = data['contests'][0]
        assert contest['name'] == 'Round 1'
        assert contest['platform'] == 'Codeforces'
        assert contest['phase'] == 'upcoming'

    def test_query_args_are_applied(self, app, client):
        _install(
            app,
            FakeScraper('Codeforces', [make_contest('cf', int(9e9))]),
            FakeScraper('Luogu', [make_contest('lg', int(9e9) + 1)]),
        )

        data = client.get('/api/contests?p=luogu').get_json()
        assert [c['name'] for c in data['contests']] == ['lg']

        data = client.get('/api/contests?platform=nowhere').get_json()
        assert data == {'count': 0, 'contests': []}

    def test_failure_is_502(self, app, client):
        app.extensions['contest_pipeline'] = FailingPipeline()
        resp = client.get('/api/contests')
        assert resp.status_code == 502
        assert 'error' in resp.get_json()


class TestCommandEndpoint:
    def test_renders_text(self, app, client):
        _install(app, FakeScraper('AtCoder', [
            make_contest('ABC 999', NOW + 86400 * 3650, url='https://atcoder.jp/contests/abc999'),
        ]))

        resp = client.get('/oi?p=at')

        assert resp.status_code == 200
        assert resp.mimetype == 'text/plain'
        body = resp.get_data(as_text=True)
        assert body.startswith('今日宜：AK\n')
        assert '比赛平台: AtCoder' in body
        assert '直达赛场: https://atcoder.jp/contests/abc999' in body

    def test_no_match(self, app, client):
        _install(app, FakeScraper('AtCoder', [make_contest('x', int(9e9))]))
        resp = client.get('/oi?p=topcoder')
        assert resp.status_code == 200
        assert resp.get_data(as_text=True) == NO_MATCH_MESSAGE

    def test_error_message(self, app, client):
        app.extensions['contest_pipeline'] = FailingPipeline()
        resp = client.get('/oi')
        assert resp.status_code == 502
        assert resp.get_data(as_text=True) == ERROR_MESSAGE


class TestSharedPipeline:
    def test_pipeline_built_once_per_app(self, app):
        from contest_sniffer.views.api import get_pipeline

        pipeline = app.extensions['contest_pipeline']
        assert isinstance(pipeline, ContestPipeline)
        with app.app_context():
            assert get_pipeline() is pipeline
            assert get_pipeline() is pipeline

    def test_requests_reuse_the_same_pipeline(self, app, client):
        pipeline = _install(app, FakeScraper('Luogu', [make_contest('lg', int(9e9))]))
        client.get('/api/contests')
        client.get('/oi')
        assert len(pipeline.aggregator.scrapers[0].calls) == 2
        assert app.extensions['contest_pipeline'] is pipeline
