"""Static driving-test question bank. Defined once at import time, never mutated."""
from typing import Tuple
from models.question import Category, Question


def _q(qid: str, category: Category, text: str, options: Tuple[str, ...], correct: int, explanation: str) -> Question:
    return Question(
        id=qid,
        text=text,
        options=options,
        correct_answer=correct,
        explanation=explanation,
        category=category,
    )


QUESTION_BANK: Tuple[Question, ...] = (
    # Road Signs
    _q("rs1", Category.ROAD_SIGNS,
       'What does a red octagonal sign with white letters reading "STOP" mean?',
       ("Slow down and proceed with caution", "Come to a complete stop",
        "Yield to oncoming traffic", "Stop only if other vehicles are present"),
       1, "A STOP sign requires drivers to come to a complete stop before proceeding, "
          "regardless of whether other vehicles are present."),
    _q("rs2", Category.ROAD_SIGNS,
       "What does a triangular sign with a red border and white interior mean?",
       ("Stop completely", "Merge lanes", "Yield right of way", "No entry"),
       2, "A triangular YIELD sign means you must give right of way to other traffic and pedestrians."),
    _q("rs3", Category.ROAD_SIGNS,
       "What does a yellow diamond-shaped sign typically indicate?",
       ("Regulatory information", "Warning of hazard ahead", "Directional information", "Service information"),
       1, "Yellow diamond-shaped signs are warning signs that alert drivers to potential hazards "
          "or changes in road conditions ahead."),

    # Traffic Rules
    _q("tr1", Category.TRAFFIC_RULES,
       "When approaching a four-way stop, who has the right of way?",
       ("The largest vehicle", "The vehicle that arrived first",
        "The vehicle turning right", "The vehicle on the right"),
       1, "At a four-way stop, the vehicle that arrives first has the right of way. "
          "If vehicles arrive simultaneously, the vehicle on the right goes first."),
    _q("tr2", Category.TRAFFIC_RULES,
       "What is the general speed limit in residential areas unless otherwise posted?",
       ("20 mph", "25 mph", "30 mph", "35 mph"),
       1, "The typical speed limit in residential areas is 25 mph unless otherwise posted."),
    _q("tr3", Category.TRAFFIC_RULES,
       "When is it legal to pass another vehicle on the right?",
       ("Never", "When the vehicle ahead is turning left", "Only on highways", "When traffic is moving slowly"),
       1, "You may pass on the right when the vehicle ahead is making a left turn, on multi-lane roads, "
          "or when directed by traffic signs."),

    # First Aid
    _q("fa1", Category.FIRST_AID,
       "What is the first thing you should do when arriving at an accident scene?",
       ("Move injured people to safety", "Check for hazards and ensure scene safety",
        "Start CPR immediately", "Call for witnesses"),
       1, "Scene safety is the top priority. You must assess hazards like fire, unstable vehicles, "
          "or traffic before providing aid."),
    _q("fa2", Category.FIRST_AID,
       "How should you position an unconscious but breathing accident victim?",
       ("On their back with head tilted back", "Sitting upright against a wall",
        "In the recovery position on their side", "Standing up to keep them conscious"),
       2, "The recovery position on their side helps keep the airway clear and prevents choking if they vomit."),
    _q("fa3", Category.FIRST_AID,
       "What should you do if someone is bleeding heavily from a wound?",
       ("Apply a tourniquet immediately", "Apply direct pressure with a clean cloth",
        "Pour water on the wound to clean it", "Give them aspirin for pain"),
       1, "Apply direct pressure with a clean cloth or bandage to control bleeding. "
          "Elevate the injured area if possible."),

    # Scenarios
    _q("sc1", Category.SCENARIOS,
       "You are driving in heavy rain and your car starts to skid. What should you do?",
       ("Brake hard immediately", "Turn the wheel in the opposite direction",
        "Ease off the gas and steer in the direction you want to go", "Accelerate to regain control"),
       2, "In a skid, ease off the gas pedal and steer gently in the direction you want the car to go. "
          "Avoid sudden movements."),
    _q("sc2", Category.SCENARIOS,
       "Your brakes fail while driving downhill. What should you do first?",
       ("Pull the parking brake hard", "Pump the brake pedal rapidly", "Shift to a lower gear", "Turn off the engine"),
       1, "First, pump the brake pedal rapidly to try to build pressure. If that fails, use the parking brake "
          "gradually and look for a safe escape route."),
    _q("sc3", Category.SCENARIOS,
       "You are approaching an intersection and the traffic light turns yellow. What should you do?",
       ("Always stop immediately", "Speed up to clear the intersection",
        "Stop if you can do so safely, proceed if stopping would be dangerous",
        "Slow down and proceed with caution"),
       2, "A yellow light means the signal is about to turn red. Stop if you can do so safely; "
          "if stopping would cause an accident, proceed through the intersection."),

    # Additional Road Signs
    _q("rs4", Category.ROAD_SIGNS,
       "What does a circular sign with a red border and white interior typically indicate?",
       ("Warning of danger ahead", "Mandatory instruction", "Prohibition or restriction",
        "Information about services"),
       2, 'Circular signs with red borders indicate prohibitions or restrictions, such as "No Entry" '
          "or speed limits."),
    _q("rs5", Category.ROAD_SIGNS,
       "What does a blue circular sign typically indicate?",
       ("Warning", "Prohibition", "Mandatory instruction", "Information"),
       2, 'Blue circular signs give mandatory instructions that must be followed, such as "Turn left ahead" '
          'or "Use this lane".'),
    _q("rs6", Category.ROAD_SIGNS,
       "What does a rectangular sign with white text on blue background indicate?",
       ("Warning sign", "Regulatory sign", "Information sign", "Construction sign"),
       2, "Rectangular signs with white text on blue background provide information about services, "
          "facilities, or directions."),

    # Additional Traffic Rules
    _q("tr4", Category.TRAFFIC_RULES,
       "What is the minimum following distance you should maintain behind another vehicle?",
       ("1 second", "2 seconds", "3 seconds", "5 seconds"),
       2, "The 3-second rule is the minimum safe following distance in normal conditions. "
          "Increase this in poor weather or visibility."),
    _q("tr5", Category.TRAFFIC_RULES,
       "When must you use your headlights?",
       ("Only at night", "From sunset to sunrise and when visibility is poor",
        "Only when it's raining", "Only on highways"),
       1, "Headlights must be used from sunset to sunrise and whenever visibility is reduced due to weather, "
          "fog, or other conditions."),
    _q("tr6", Category.TRAFFIC_RULES,
       "What should you do when approaching a school bus with flashing red lights?",
       ("Slow down and proceed with caution", "Stop at least 20 feet away",
        "Change lanes and pass quickly", "Honk your horn to alert the driver"),
       1, "When a school bus has flashing red lights, you must stop at least 20 feet away and wait until "
          "the lights stop flashing."),

    # Additional First Aid
    _q("fa4", Category.FIRST_AID,
       "What is the correct ratio of chest compressions to rescue breaths in CPR for adults?",
       ("15:2", "30:2", "5:1", "10:1"),
       1, "For adult CPR, perform 30 chest compressions followed by 2 rescue breaths, then repeat this cycle."),
    _q("fa5", Category.FIRST_AID,
       "How should you treat a burn injury?",
       ("Apply ice directly to the burn", "Use butter or oil on the burn",
        "Cool with running water for 10-20 minutes", "Pop any blisters that form"),
       2, "Cool burns with running water for 10-20 minutes. Never use ice, butter, or oil, "
          "and don't pop blisters."),
    _q("fa6", Category.FIRST_AID,
       "What should you do if someone is choking and cannot speak or cough?",
       ("Give them water to drink", "Perform the Heimlich maneuver", "Lay them down flat",
        "Wait for them to clear it themselves"),
       1, "If someone is choking and cannot speak or cough, perform the Heimlich maneuver "
          "(abdominal thrusts) immediately."),

    # Additional Scenarios
    _q("sc4", Category.SCENARIOS,
       "You are driving on a highway and notice a vehicle merging from an on-ramp. What should you do?",
       ("Speed up to prevent them from merging", "Maintain your speed and position",
        "Adjust your speed or change lanes to allow safe merging", "Honk your horn to warn them"),
       2, "Help merging vehicles by adjusting your speed or changing lanes when safe to do so. "
          "Cooperation makes traffic flow smoother and safer."),
    _q("sc5", Category.SCENARIOS,
       "What should you do if you encounter a funeral procession?",
       ("Pass it as quickly as possible", "Join the procession if going the same direction",
        "Pull over and wait for it to pass", "Drive through the middle of it"),
       2, "Show respect by pulling over and allowing the funeral procession to pass. "
          "Never break up or drive through a procession."),
    _q("sc6", Category.SCENARIOS,
       "You are driving in fog with very limited visibility. What should you do?",
       ("Use high beam headlights", "Follow the car ahead closely for guidance",
        "Use low beam headlights and reduce speed", "Turn on hazard lights and maintain normal speed"),
       2, "In fog, use low beam headlights (high beams reflect off fog), reduce speed significantly, "
          "and increase following distance."),

    # More Road Signs
    _q("rs7", Category.ROAD_SIGNS,
       "What does a diamond-shaped orange sign indicate?",
       ("School zone", "Construction or work zone", "Hospital zone", "Residential area"),
       1, "Orange diamond-shaped signs indicate construction or work zones where you should reduce speed "
          "and be extra cautious."),
    _q("rs8", Category.ROAD_SIGNS,
       "What does a sign with a bicycle symbol mean?",
       ("Bicycles prohibited", "Bicycle repair shop ahead", "Bicycle lane or path", "Bicycle crossing"),
       2, "Signs with bicycle symbols typically indicate bicycle lanes, paths, or areas where bicycles "
          "are expected."),

    # More Traffic Rules
    _q("tr7", Category.TRAFFIC_RULES,
       "When are you required to yield the right of way?",
       ("Only at yield signs", "When entering a highway from a ramp",
        "When turning left across traffic", "All of the above"),
       3, "You must yield right of way in many situations: at yield signs, when merging, when turning left, "
          "and to pedestrians in crosswalks."),
    _q("tr8", Category.TRAFFIC_RULES,
       "What is the purpose of anti-lock brakes (ABS)?",
       ("To stop the car faster", "To prevent wheels from locking during hard braking",
        "To reduce brake wear", "To make braking quieter"),
       1, "ABS prevents wheels from locking up during hard braking, allowing you to maintain steering "
          "control while stopping."),
)
