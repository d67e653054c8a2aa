from near_resume.schemas.resume import Bullet, Resume
from near_resume.services.bullet_capper import limit_bullets, select_bullets


def _bullets(count, metric_indices):
    return [Bullet(text=f"Bullet {i}.", metrics=["1 win"] if i in metric_indices else []) for i in range(count)]


def test_metric_bullets_kept_and_order_preserved():
    """
    Test 10 bullets with 4 metric bullets keep those 4 plus the first 3 others, in original order.
    """
    resume = Resume.model_validate({"experience": [{"company": "Acme"}]})
    resume.experience[0].bullets = _bullets(10, {1, 3, 6, 9})
    result = limit_bullets(resume, max_bullets=7)

    texts = [b.text for b in result.experience[0].bullets]
    assert texts == ["Bullet 0.", "Bullet 1.", "Bullet 2.", "Bullet 3.", "Bullet 4.", "Bullet 6.", "Bullet 9."]
    assert len(resume.experience[0].bullets) == 10


def test_metric_bullets_alone_reach_cap():
    """
    Test the first max_bullets metric bullets win when they alone fill the cap.
    """
    chosen = select_bullets(_bullets(6, {0, 2, 3, 5}), 3)
    assert [b.text for b in chosen] == ["Bullet 0.", "Bullet 2.", "Bullet 3."]


def test_roles_under_cap_are_unchanged():
    """
    Test a role at or below the cap is left alone.
    """
    bullets = _bullets(7, set())
    assert select_bullets(bullets, 7) == bullets
