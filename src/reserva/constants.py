BASE_URL = "https://reserva.be"

# Only reachable with a logged-in session; anything else gets redirected to the login page
RESERVE_HISTORY_URL = f"{BASE_URL}/mypage/reservehistory"

USER_LOGIN_URL = f"{BASE_URL}/mypage/login"
AIKOTOBA_LOGIN_URL = f"{BASE_URL}/aikotoba/login"

USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/108.0.0.0 Safari/537.36"
)
