import threading
import time


class SharedState:
    """
    Singleton class to share state between the processing loop
    and the FastAPI status server.
    """
    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super(SharedState, cls).__new__(cls)
                    cls._instance.frame_lock = threading.Lock()
                    cls._instance.detection_lock = threading.Lock()
                    cls._instance.reset()
        return cls._instance

    def reset(self):
        """Drop the current frame and detection status."""
        with self.frame_lock:
            self.frame = None
        with self.detection_lock:
            self.detection = {}
        self.system_stats = {
            "fps": 0.0,
            "start_time": time.time(),
            "last_frame_ts": None,
        }

    def set_frame(self, frame):
        """Update the current (annotated) video frame."""
        with self.frame_lock:
            if frame is not None:
                self.frame = frame.copy()
                self.system_stats["last_frame_ts"] = time.time()

    def get_frame(self):
        """Get the current video frame."""
        with self.frame_lock:
            if self.frame is None:
                return None
            return self.frame.copy()

    def update_detection(self, summary):
        with self.detection_lock:
            self.detection = dict(summary)

    def get_detection_copy(self):
        with self.detection_lock:
            return dict(self.detection)

    def update_system_stats(self, stats):
        self.system_stats.update(stats)

    def get_system_stats_copy(self):
        """Return a shallow copy of current system stats."""
        return dict(self.system_stats)


# Global instance
state = SharedState()
