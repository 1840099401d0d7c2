import cv2
import mediapipe as mp

HAND_CONNECTIONS = mp.solutions.hands.HAND_CONNECTIONS

# BGR (connector, point) colors; first hand green/red, second cyan/yellow
HAND_COLORS = [
    ((0, 255, 0), (0, 0, 255)),
    ((255, 255, 0), (0, 255, 255)),
]


def draw_landmarks(frame, detections):
    """Draw each hand's skeleton onto `frame` in place."""
    h, w = frame.shape[:2]
    for i, det in enumerate(detections):
        line_color, point_color = HAND_COLORS[min(i, len(HAND_COLORS) - 1)]
        pts = [(int(lm[0] * w), int(lm[1] * h)) for lm in det.landmarks]
        for start, end in HAND_CONNECTIONS:
            if start < len(pts) and end < len(pts):
                cv2.line(frame, pts[start], pts[end], line_color, 3)
        for p in pts:
            cv2.circle(frame, p, 4, point_color, -1)
    return frame


def draw_status(frame, session):
    """Overlay tracked hands and model visibility as text."""
    lines = []
    for det in session.last_detections:
        lines.append(f'{det.handedness.value} hand: {det.score:.2f}')
    for binding in session.registry:
        state = 'shown' if binding.visible else 'hidden'
        lines.append(f'{binding.model.name} ({binding.handedness.value}): {state}')
    for i, ln in enumerate(lines):
        cv2.putText(frame, ln, (10, 30 + i * 24), cv2.FONT_HERSHEY_SIMPLEX, 0.6, (255, 255, 255), 2)
    return frame
