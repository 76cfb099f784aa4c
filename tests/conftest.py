"""
Shared fixtures: a stand-in for watchdog observers that never touches the OS
"""

import logging
from types import SimpleNamespace

import pytest


class FakeEmitter:
    def __init__(self):
        self.alive = True
    
    def is_alive(self):
        return self.alive


class FakeObserver:
    """Mimics the parts of watchdog's BaseObserver the native backend uses"""
    
    def __init__(self, registry, fail_on_start=False):
        self.registry = registry
        self.fail_on_start = fail_on_start
        self.handler = None
        self.path = None
        self.recursive = None
        self.alive = False
        self.stop_calls = 0
        self.emitters = set()
    
    def schedule(self, handler, path, recursive=False):
        self.handler = handler
        self.path = path
        self.recursive = recursive
        self.emitters.add(FakeEmitter())
        return SimpleNamespace(path=path, is_recursive=recursive)
    
    def start(self):
        if self.fail_on_start:
            raise OSError(28, "inotify watch limit reached")
        self.alive = True
        self.registry.opened()
    
    def stop(self):
        self.stop_calls += 1
        self.alive = False
        self.emitters.clear()
        self.registry.closed()
    
    def join(self, timeout=None):
        pass
    
    def is_alive(self):
        return self.alive
    
    def unschedule_all(self):
        self.emitters.clear()
    
    def emit(self, event):
        """Deliver an event the way the observer thread would"""
        self.handler.dispatch(event)
    
    def kill_emitters(self):
        for emitter in self.emitters:
            emitter.alive = False


class FakeObserverFactory:
    """Observer factory that tracks how many observers are running at once"""
    
    def __init__(self):
        self.observers = []
        self.live = 0
        self.max_live = 0
        self.fail_on_start = False
    
    def __call__(self):
        observer = FakeObserver(self, fail_on_start=self.fail_on_start)
        self.observers.append(observer)
        return observer
    
    def opened(self):
        self.live += 1
        self.max_live = max(self.max_live, self.live)
    
    def closed(self):
        self.live -= 1
    
    @property
    def last(self):
        return self.observers[-1]


@pytest.fixture
def observer_factory():
    return FakeObserverFactory()


@pytest.fixture
def watch_dirs(tmp_path):
    """Two real directories to watch"""
    first = tmp_path / "first"
    second = tmp_path / "second"
    first.mkdir()
    second.mkdir()
    return first, second


@pytest.fixture(autouse=True)
def reset_dirwatch_logger():
    """Drop handlers the CLI installs so they don't outlive the test's streams"""
    yield
    logger = logging.getLogger('dirwatch')
    for handler in logger.handlers[:]:
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
