from __future__ import annotations

# Third Party Imports
import pytest
from pydantic import ValidationError

# MissionTime Imports
from missiontime import getDefaultContext
from missiontime.physics.lighttime import ConstantLightTimeProvider, EphemerisLightTimeProvider
from missiontime.physics.time import context as ctx
from missiontime.physics.time.defaults import TimeDefaults
from missiontime.physics.time.duration import Duration
from missiontime.physics.time.epochs import EpochCatalog
from missiontime.physics.time_scales import KernelTimeScaleService

# Local Imports
from ... import buildEpochCatalog


def testLazyDefaults():
    """Test that the default context builds its collaborators from configuration on first use."""
    context = getDefaultContext()
    assert context is ctx.getDefaultContext()
    assert ctx.resolveContext(None) is context

    assert context.defaults == TimeDefaults()
    assert isinstance(context.time_scales, KernelTimeScaleService)
    assert isinstance(context.light_time, EphemerisLightTimeProvider)
    assert isinstance(context.epochs, EpochCatalog)
    assert len(context.epochs) == 0


def testReset():
    """Test that resetting discards the default context."""
    first = ctx.getDefaultContext()
    ctx.setDefaultSpacecraftId(-168)
    ctx.resetDefaultContext()
    second = ctx.getDefaultContext()
    assert second is not first
    assert ctx.getDefaultSpacecraftId() == -1


def testExplicitContext():
    """Test that an explicit context is used instead of the default one."""
    context = ctx.TimeContext(defaults=TimeDefaults(output_precision=2))
    assert ctx.resolveContext(context) is context
    assert Duration("00:00:01").toString(context=context) == "00:00:01.00"
    assert str(Duration("00:00:01")) == "00:00:01.000000"


def testDefaultSetters():
    """Test the process-wide setters and getters."""
    ctx.setDefaultSpacecraftId(-168)
    assert ctx.getDefaultSpacecraftId() == -168

    ctx.setDefaultLstBodyId(399)
    assert ctx.getDefaultLstBodyId() == 399

    ctx.setDefaultLstBodyFrame("iau_earth")
    assert ctx.getDefaultLstBodyFrame() == "IAU_EARTH"

    ctx.setDefaultOutputPrecision(3)
    assert ctx.getDefaultOutputPrecision() == 3
    assert str(Duration("00:00:01")) == "00:00:01.000"

    ctx.setUseServiceMath(True)
    assert ctx.getUseServiceMath() is True


@pytest.mark.parametrize("precision", [-1, 9])
def testInvalidPrecision(precision: int):
    """Test that an out of range output precision is rejected and the old value kept."""
    with pytest.raises(ValidationError):
        ctx.setDefaultOutputPrecision(precision)
    assert ctx.getDefaultOutputPrecision() == 6


def testCollaboratorSetters():
    """Test binding the light time provider, time scale service, and epoch catalog."""
    provider = ConstantLightTimeProvider(Duration("00:05:00"))
    ctx.setLightTimeProvider(provider)
    assert ctx.getLightTimeProvider() is provider

    service = ctx.getTimeScaleService()
    replacement = KernelTimeScaleService(service._leap_second_loader)  # noqa: SLF001
    ctx.setTimeScaleService(replacement)
    assert ctx.getTimeScaleService() is replacement

    catalog = buildEpochCatalog()
    ctx.setEpochCatalog(catalog)
    assert ctx.getEpochCatalog() is catalog
    assert ctx.getDefaultContext().epochs is catalog


def testDefaultsFromConfig():
    """Test building the defaults from the behavioral configuration."""
    defaults = TimeDefaults.fromConfig()
    assert defaults.spacecraft_id == -1
    assert defaults.lst_body_id == 499
    assert defaults.lst_body_frame == "IAU_MARS"
    assert defaults.output_precision == 6
    assert defaults.use_service_math is False
