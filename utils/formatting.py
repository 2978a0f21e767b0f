"""Human readable formatting helpers"""


def format_age(minutes):
    """Format an age in minutes as DDd:HHh:MMm:SSs"""
    total_seconds = minutes * 60

    days = total_seconds // 86400
    hours = (total_seconds % 86400) // 3600
    mins = (total_seconds % 3600) // 60
    secs = total_seconds % 60

    return f"{days:02d}d:{hours:02d}h:{mins:02d}m:{secs:02d}s"
