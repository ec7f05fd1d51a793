"""Known keys shared by the test modules."""

SMALL_N = 3233  # 61 * 53
SMALL_PHI = 3120

# n and d of a 2048 bit key generated with close primes, e = 65537
LARGE_N = int(
    "240517239333233732303351096526998728872603728636330305203808565909342245"
    "545063089441545296569036830985442828688952658577236767404470857699730381"
    "381161628527536581818611919507783615496395635655160854510735395606573861"
    "035016085923211486694276041948775521338648875858970649103173706324913259"
    "126467590754528957641360717948997616256527456428880121935928436017862827"
    "074190641579228684668796441367928547222772124650674716584968180609809898"
    "087913529639060779405880386233475406689638855477859825438832507891138535"
    "695377947833303096546485461630635717562038349196978789456519119981610253"
    "23667873893944714006021586935213636888431"
)
LARGE_D = int(
    "208596050573899814004152966652396062535513119794320432999363337926989393"
    "694185588915696371693661358261464286431349926924814389161888995236202071"
    "308174707476336295130812867432182018114952340433704438859509729631842343"
    "826682321555600923023878968343476995550108541052352605770408933790099405"
    "457822167491595151184842195663731577314042933213890174170369459929844371"
    "620561452465049434731284538897152740640716879263439007182506712260032079"
    "885534910714907749497293937902642965261409628911406504285601036455380276"
    "324651035732483089159914664763126032757780856794141823390766766213722220"
    "55380237829179961993191380693342799887257"
)

# 512 bit key generated with well separated primes
SECURE_PUBLIC_KEY = """-----BEGIN PUBLIC KEY-----
MFwwDQYJKoZIhvcNAQEBBQADSwAwSAJBAMp2Z+WFY2ygdgPMnWpJNxqtuweA1nix
kTirAEQ+F3NKfNEdR9J/+Rq+2ViT3wnamtuBG+10SKuKjr9FKhh/T0sCAwEAAQ==
-----END PUBLIC KEY-----
"""


def sequence_source(values):
    """Prime source replaying values and recording the requested bit sizes."""
    values = iter(values)
    requested = []

    def source(bits):
        requested.append(bits)
        return next(values)

    source.requested = requested
    return source
