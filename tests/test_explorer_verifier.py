"""
Unit Tests for Explorer Source Verification
"""

import json

import pytest

from utils.explorer_verifier import ExplorerVerifier


ADDRESS = '0x5FbDB2315678afecb367f032d93F642f64180aa3'
API_URL = 'https://api.etherscan.io/v2/api'

BUILD_INFO = {
    'solcVersion': '0.8.20',
    'solcLongVersion': '0.8.20+commit.a1b79de6',
    'input': {'language': 'Solidity', 'sources': {}}
}


class FakeResponse:
    """Async context manager standing in for aiohttp's response"""

    def __init__(self, data):
        self.data = data
        self.status = 200

    async def json(self, content_type=None):
        return self.data

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False


class FakeSession:
    """Replays canned explorer answers and records requests"""

    def __init__(self, post_responses, get_responses=()):
        self.post_responses = list(post_responses)
        self.get_responses = list(get_responses)
        self.posts = []
        self.gets = []

    def post(self, url, params=None, data=None, timeout=None):
        self.posts.append({'url': url, 'params': params, 'data': data})
        return FakeResponse(self.post_responses.pop(0))

    def get(self, url, params=None, timeout=None):
        self.gets.append({'url': url, 'params': params})
        return FakeResponse(self.get_responses.pop(0))


@pytest.fixture
def verifier():
    return ExplorerVerifier(API_URL, 'api-key', 56, poll_interval=0, max_attempts=3)


async def run_verify(verifier, session):
    return await verifier.verify(
        ADDRESS,
        BUILD_INFO,
        'contracts/Claims.sol',
        'Claims',
        'abcd',
        session=session
    )


class TestExplorerVerifier:
    """Test submission and status polling"""

    @pytest.mark.asyncio
    async def test_submit_payload(self, verifier):
        session = FakeSession(
            [{'status': '1', 'message': 'OK', 'result': 'guid-1'}],
            [{'status': '1', 'message': 'OK', 'result': 'Pass - Verified'}]
        )

        assert await run_verify(verifier, session)

        post = session.posts[0]
        assert post['url'] == API_URL
        assert post['params'] == {'chainid': 56}
        assert post['data']['action'] == 'verifysourcecode'
        assert post['data']['contractaddress'] == ADDRESS
        assert post['data']['codeformat'] == 'solidity-standard-json-input'
        assert post['data']['contractname'] == 'contracts/Claims.sol:Claims'
        assert post['data']['compilerversion'] == 'v0.8.20+commit.a1b79de6'
        assert post['data']['constructorArguements'] == 'abcd'
        assert json.loads(post['data']['sourceCode']) == BUILD_INFO['input']

        assert session.gets[0]['params']['guid'] == 'guid-1'
        assert session.gets[0]['params']['action'] == 'checkverifystatus'

    @pytest.mark.asyncio
    async def test_polls_while_pending(self, verifier):
        session = FakeSession(
            [{'status': '1', 'message': 'OK', 'result': 'guid-2'}],
            [
                {'status': '0', 'message': 'NOTOK', 'result': 'Pending in queue'},
                {'status': '0', 'message': 'NOTOK', 'result': 'Pending in queue'},
                {'status': '1', 'message': 'OK', 'result': 'Pass - Verified'}
            ]
        )

        assert await run_verify(verifier, session)
        assert len(session.gets) == 3

    @pytest.mark.asyncio
    async def test_already_verified_on_submit(self, verifier):
        """Test no polling when the explorer already has the source"""
        session = FakeSession([
            {'status': '0', 'message': 'NOTOK', 'result': 'Contract source code already verified'}
        ])

        assert await run_verify(verifier, session)
        assert session.gets == []

    @pytest.mark.asyncio
    async def test_rejected_submission(self, verifier):
        session = FakeSession([
            {'status': '0', 'message': 'NOTOK', 'result': 'Invalid API Key'}
        ])

        with pytest.raises(RuntimeError, match='Invalid API Key'):
            await run_verify(verifier, session)

    @pytest.mark.asyncio
    async def test_failed_verification(self, verifier):
        session = FakeSession(
            [{'status': '1', 'message': 'OK', 'result': 'guid-3'}],
            [{'status': '0', 'message': 'NOTOK', 'result': 'Fail - Unable to verify'}]
        )

        with pytest.raises(RuntimeError, match='Unable to verify'):
            await run_verify(verifier, session)

    @pytest.mark.asyncio
    async def test_gives_up_after_max_attempts(self, verifier):
        session = FakeSession(
            [{'status': '1', 'message': 'OK', 'result': 'guid-4'}],
            [{'status': '0', 'message': 'NOTOK', 'result': 'Pending in queue'}] * 3
        )

        with pytest.raises(RuntimeError, match='still pending'):
            await run_verify(verifier, session)

        assert len(session.gets) == 3
