from catalog.state.debounce import Debouncer

class FakeClock:
    def __init__(self):
        self.now_ms = 100_000

    def __call__(self):
        return self.now_ms / 1000.0

    def advance(self, ms):
        self.now_ms += ms

def test_commits_after_quiet_period():
    clock = FakeClock()
    debouncer = Debouncer(delay_ms=700, initial="", clock=clock)
    debouncer.push("lamp")
    assert debouncer.poll() is None
    clock.advance(699)
    assert debouncer.poll() is None
    clock.advance(2)
    assert debouncer.poll() == "lamp"
    assert debouncer.committed == "lamp"
    assert not debouncer.pending

def test_keystrokes_restart_the_window():
    clock = FakeClock()
    debouncer = Debouncer(delay_ms=700, initial="", clock=clock)
    debouncer.push("l")
    clock.advance(500)
    debouncer.push("la")
    clock.advance(500)
    assert debouncer.poll() is None
    assert round(debouncer.remaining(), 3) == 0.2
    clock.advance(201)
    assert debouncer.poll() == "la"

def test_unchanged_value_does_not_commit():
    clock = FakeClock()
    debouncer = Debouncer(delay_ms=700, initial="desk", clock=clock)
    debouncer.push("desk")
    assert not debouncer.pending
    debouncer.push("desks")
    debouncer.push("desk")
    clock.advance(701)
    assert debouncer.poll() is None
    assert debouncer.committed == "desk"

def test_remaining_is_zero_when_idle():
    assert Debouncer(clock=FakeClock()).remaining() == 0.0

def test_repushing_same_value_does_not_restart_window():
    clock = FakeClock()
    debouncer = Debouncer(delay_ms=700, initial="", clock=clock)
    debouncer.push("lamp")
    clock.advance(500)
    debouncer.push("lamp")
    clock.advance(201)
    assert debouncer.poll() == "lamp"

def test_page_rerun_after_quiet_window_commits():
    clock = FakeClock()
    debouncer = Debouncer(delay_ms=700, initial="", clock=clock)
    debouncer.push("lamp")
    clock.advance(int(debouncer.remaining() * 1000) + 1)
    # the rerun pushes the unchanged widget value again
    debouncer.push("lamp")
    assert debouncer.poll() == "lamp"
    assert not debouncer.pending
