from haste.common.time import expiry_deadline, is_expired


def test_expiry_deadline():
    assert expiry_deadline(60, now=100) == 160
    assert expiry_deadline(None, now=100) is None
    assert expiry_deadline(0, now=100) is None


def test_is_expired():
    assert is_expired(None, now=10**12) is False
    assert is_expired(100, now=99) is False
    assert is_expired(100, now=100) is True
    assert is_expired(100, now=101) is True
