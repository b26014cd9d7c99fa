# config.py
# 각종 물리 상수 및 데모 기본값 정의 (모든 물리량은 SI 단위)
# 섭씨 20도 및 표준압(1 atm = 101325 Pa) 기준 / 습도 무시

# 중력 가속도 [m/s^2]
g = 9.81

# 만유인력 상수 [N*m^2/kg^2]
G = 6.67430e-11

# 화면 배율 [px/m], 상태<->화면 경계에서만 사용
PIXELS_PER_METER = 100.0

# 밀도 ρ [kg/m^3]
class Density:
    class Gas:
        Air = 1.204 # 대기

# 시간 간격
class Step:
    MAX_FRAME_DT = 0.1 # 이보다 긴 프레임은 버림 (탭 비활성 등)
    FIXED_DT = 1.0 / 60.0 # 고정 물리 스텝
    MAX_SUBSTEPS = 8 # 한 프레임에서 소모할 수 있는 최대 고정 스텝 수

# 정지 판정 임계값
class Rest:
    SPEED = 0.5 # [m/s]
    DISPLACEMENT = 0.01 # [m]
    ANGULAR_SPEED = 0.017453292519943295 # 1 deg/s [rad/s]
    ANGLE = 0.017453292519943295 # 1 deg [rad]

# 화면 표시
class Display:
    TRAJECTORY_SAMPLES = 3600 # 경로 버퍼 크기 (60 Hz 로 1분)
    GRAPH_WINDOW = 8.0 # 스프링 변위-시간 그래프에 보이는 구간 [s]

# 입력 경계에서 강제하는 최솟값 (0 나누기 방지)
class Limits:
    MASS = 0.01 # [kg]
    LENGTH = 0.01 # [m]
    SPRING_CONSTANT = 0.01 # [N/m]
    RADIUS = 0.001 # [m]

# 데모별 기본 파라미터
class Defaults:
    class Drop:
        mass = 1.0
        height = 4.0 # 공 중심 높이 [m]
        radius = 0.2
        restitution = 0.7
        air_density = Density.Gas.Air

    class Spring:
        mass = 1.0
        spring_constant = 10.0 # [N/m]
        damping = 0.5 # [N*s/m]
        displacement = 1.0 # [m]

    class GravityPair:
        mass1 = 1000.0
        mass2 = 500.0
        radius1 = 0.3
        radius2 = 0.2
        separation = 4.0
        # 화면 속도 조절용 배율 (물리 상수 아님)
        gravity_multiplier = 1.0e10

    class Pendulum:
        length = 2.0 # 200 px
        angle = 30.0 # [deg]
        mass = 1.0

    class FrictionSlide:
        mass = 2.0
        friction = 0.3 # 운동 마찰 계수
        velocity = 8.0
        track_length = 20.0
        box = (0.5, 0.5, 0.5) # w, h, d [m]
        restitution = 0.5

    class Projectile:
        angle = 45.0 # [deg]
        velocity = 20.0 # [m/s]
        height = 0.0
        domain_width = 200.0
