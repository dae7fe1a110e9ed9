import pytest

from spongefish_poseidon.fields import BLS12_381_FR, PrimeField
from spongefish_poseidon.params import (
    PoseidonConfig,
    PoseidonDefaultConfigEntry,
    find_poseidon_ark_and_mds,
    get_default_poseidon_parameters,
)

Fr = BLS12_381_FR


DEFAULT_CASES = [
    (2, False,
     27117311055620256798560880810000042840428971800021819916023577129547249660720,
     26017457457808754696901916760153646963713419596921330311675236858336250747575),
    (3, False,
     11865901593870436687704696210307853465124332568266803587887584059192277437537,
     18791275321793747281053101601584820964683215017313972132092847596434094368732),
    (4, False,
     41775194144383840477168997387904574072980173775424253289429546852163474914621,
     42906651709148432559075674119637355642263148226238482628104108168707874713729),
    (5, False,
     24877380261526996562448766783081897666376381975344509826094208368479247894723,
     30022080821787948421423927053079656488514459012053372877891553084525866347732),
    (6, False,
     37928506567864057383105673253383925733025682403141583234734361541053005808936,
     49124738641420159156404016903087065194698370461819821829905285681776084204443),
    (7, False,
     37848764121158464546907147011864524711588624175161409526679215525602690343051,
     28113878661515342855868752866874334649815072505130059513989633785080391114646),
    (8, False,
     51456871630395278065627483917901523970718884366549119139144234240744684354360,
     12929023787467701044434927689422385731071756681420195282613396560814280256210),
    (2, True,
     25126470399169474618535500283750950727260324358529540538588217772729895991183,
     46350838805835525240431215868760423854112287760212339623795708191499274188615),
    (3, True,
     16345358380711600255519479157621098002794924491287389755192263320486827897573,
     37432344439659887296708509941462699942272362339508052702346957525719991245918),
    (4, True,
     2997721997773001075802235431463112417440167809433966871891875582435098138600,
     43959024692079347032841256941012668338943730711936867712802582656046301966186),
    (5, True,
     28142027771717376151411984909531650866105717069245696861966432993496676054077,
     13157425078305676755394500322568002504776463228389342308130514165393397413991),
    (6, True,
     7417004907071346600696060525974582183666365156576759507353305331252133694222,
     51393878771453405560681338747290999206747890655420330824736778052231938173954),
    (7, True,
     47093173418416013663709314805327945458844779999893881721688570889452680883650,
     51455917624412053400160569105425532358410121118308957353565646758865245830775),
    (8, True,
     16478680729975035007348178961232525927424769683353433314299437589237598655079,
     39160448583049384229582837387246752222769278402304070376350288593586064961857),
]


@pytest.mark.parametrize("rate, weights, ark00, mds00", DEFAULT_CASES)
def test_bls12_381_fr_default_parameters(rate, weights, ark00, mds00):
    config = get_default_poseidon_parameters(Fr, rate, weights)
    assert config.ark[0][0] == Fr(ark00)
    assert config.mds[0][0] == Fr(mds00)


def test_default_rate_2_constraints_shape():
    config = get_default_poseidon_parameters(Fr, 2, False)
    assert (config.full_rounds, config.partial_rounds, config.alpha) == (8, 31, 17)
    assert (config.rate, config.capacity) == (2, 1)
    assert config.state_size == 3
    assert len(config.ark) == 39
    assert all(len(row) == 3 for row in config.ark)
    assert len(config.mds) == 3 and all(len(row) == 3 for row in config.mds)


def test_default_weights_alpha():
    config = get_default_poseidon_parameters(Fr, 3, True)
    assert config.alpha == 257
    assert config.partial_rounds == 13


def test_unknown_rate_gives_none():
    assert get_default_poseidon_parameters(Fr, 9, False) is None
    assert get_default_poseidon_parameters(Fr, 1, True) is None


def test_unknown_field_raises():
    with pytest.raises(ValueError):
        get_default_poseidon_parameters(PrimeField(101, 2), 2, False)


def test_ark_follows_grain_rejection_sampling():
    ark, mds = find_poseidon_ark_and_mds(Fr, 255, 2, 8, 31, 0)
    assert ark[0][0] == Fr(
        27117311055620256798560880810000042840428971800021819916023577129547249660720
    )
    assert ark[0][1] == Fr(
        51641662388546346858987925410984003801092143452466182801674685248597955169158
    )
    assert mds[0][0] == Fr(
        26017457457808754696901916760153646963713419596921330311675236858336250747575
    )


def test_skip_matrices_changes_only_mds():
    ark0, mds0 = find_poseidon_ark_and_mds(Fr, 255, 2, 8, 31, 0)
    ark1, mds1 = find_poseidon_ark_and_mds(Fr, 255, 2, 8, 31, 1)
    assert ark0 == ark1
    assert mds0 != mds1


def test_returned_lists_are_independent():
    ark, mds = find_poseidon_ark_and_mds(Fr, 255, 2, 8, 31, 0)
    ark[0][0] = Fr(0)
    mds[0][0] = Fr(0)
    ark2, mds2 = find_poseidon_ark_and_mds(Fr, 255, 2, 8, 31, 0)
    assert ark2[0][0] != Fr(0)
    assert mds2[0][0] != Fr(0)


def test_mismatched_prime_bits_rejected():
    with pytest.raises(ValueError):
        find_poseidon_ark_and_mds(Fr, 254, 2, 8, 31, 0)


def _matrix(rows, cols):
    return [[Fr(i * cols + j) for j in range(cols)] for i in range(rows)]


def test_config_accepts_consistent_shapes():
    config = PoseidonConfig(
        full_rounds=2, partial_rounds=1, alpha=5,
        ark=_matrix(3, 3), mds=_matrix(3, 3), rate=2, capacity=1,
    )
    assert config.state_size == 3
    assert config.ark[2][1] == Fr(7)


@pytest.mark.parametrize(
    "ark, mds",
    [
        (_matrix(2, 3), _matrix(3, 3)),
        (_matrix(3, 2), _matrix(3, 3)),
        (_matrix(3, 3), _matrix(2, 3)),
        (_matrix(3, 3), _matrix(3, 4)),
    ],
)
def test_config_rejects_bad_shapes(ark, mds):
    with pytest.raises(ValueError):
        PoseidonConfig(
            full_rounds=2, partial_rounds=1, alpha=5,
            ark=ark, mds=mds, rate=2, capacity=1,
        )


def test_default_entry_fields():
    entry = PoseidonDefaultConfigEntry(2, 17, 8, 31, 0)
    assert (entry.rate, entry.alpha, entry.full_rounds, entry.partial_rounds,
            entry.skip_matrices) == (2, 17, 8, 31, 0)